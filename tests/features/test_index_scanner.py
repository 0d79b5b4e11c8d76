import os
import posixpath
from pathlib import Path

import pytest

from movix_backend.features.index.entry_builder import build_record, record_from_relative
from movix_backend.features.index.fs_walker import FileSystemWalker, WalkEntry
from movix_backend.features.index.scanner import IndexScanner, scan
from movix_shared import ScanWarningKind


def test_scan_builds_posix_records(media_tree) -> None:
    root = media_tree(["A/x.mp4", "A/C/z.mkv", "B/y.MP4", "root.mkv", "A/readme.txt"])

    report = scan(root)

    by_name = {r.file_name: r for r in report.records}
    assert set(by_name) == {"x.mp4", "z.mkv", "y.MP4", "root.mkv"}
    assert by_name["z.mkv"].path == "A/C/z.mkv"
    assert by_name["z.mkv"].folder == "A/C"
    assert by_name["root.mkv"].folder == "."
    assert report.warnings == []


def test_scanned_folder_is_directory_of_path(media_tree) -> None:
    root = media_tree(["one/two/three/deep.mp4", "one/flat.mkv", "top.mp4"])

    for record in scan(root).records:
        assert "\\" not in record.path
        expected = posixpath.dirname(record.path) or "."
        assert record.folder == expected
        assert posixpath.basename(record.path) == record.file_name


def test_scan_of_empty_root_has_no_records(tmp_path: Path) -> None:
    report = IndexScanner().scan(tmp_path)
    assert report.records == []
    assert report.warnings == []


def test_scan_missing_root_warns_and_continues(tmp_path: Path) -> None:
    report = IndexScanner().scan(tmp_path / "gone")

    assert report.records == []
    assert [w.kind for w in report.warnings] == [ScanWarningKind.LIST_FAILED]


@pytest.mark.skipif(os.name == "nt", reason="symlinks required")
def test_scan_records_stat_failures(media_tree) -> None:
    root = media_tree(["A/good.mp4"])
    (root / "A" / "bad.mkv").symlink_to(root / "A" / "missing.mkv")

    report = IndexScanner().scan(root)

    assert [r.file_name for r in report.records] == ["good.mp4"]
    assert len(report.warnings) == 1
    warning = report.warnings[0]
    assert warning.kind == ScanWarningKind.STAT_FAILED
    assert warning.to_dict()["kind"] == "STAT_FAILED"


def test_record_from_relative_normalizes_backslashes() -> None:
    record = record_from_relative("Shows\\Season 1\\ep1.mkv")
    assert record.path == "Shows/Season 1/ep1.mkv"
    assert record.folder == "Shows/Season 1"
    assert record.file_name == "ep1.mkv"

    top = record_from_relative(".\\movie.mp4")
    assert top.path == "movie.mp4"
    assert top.folder == "."


def test_build_record_outside_root_is_relpath_failure(tmp_path: Path) -> None:
    res = build_record(tmp_path / "root", tmp_path / "elsewhere" / "x.mp4")
    assert not res.ok
    assert res.code == "INVALID_INPUT"


def test_record_json_shape() -> None:
    assert record_from_relative("A/x.mp4").to_dict() == {
        "FileName": "x.mp4",
        "Path": "A/x.mp4",
        "Folder": "A",
    }


class _OutsideRootWalker(FileSystemWalker):
    def __init__(self, stray: Path):
        self._stray = stray

    def iter_entries(self, root: Path):
        yield WalkEntry(self._stray, False)


def test_scanner_reports_relpath_failure_kind(tmp_path: Path) -> None:
    stray = tmp_path / "elsewhere" / "x.mp4"

    report = IndexScanner(walker=_OutsideRootWalker(stray)).scan(tmp_path / "root")

    assert report.records == []
    assert [w.kind for w in report.warnings] == [ScanWarningKind.RELPATH_FAILED]
