"""
Index scanner - walks the scan root and collects video records.
"""
from __future__ import annotations

from pathlib import Path

from ...shared import ScanWarningKind, get_logger
from .entry_builder import build_record
from .fs_walker import FileSystemWalker
from .models import ScanReport, ScanWarning

logger = get_logger(__name__)


class IndexScanner:
    """
    Turns a directory tree into MediaRecords.

    Best-effort: an entry that cannot be inspected becomes a ScanWarning
    (also logged) and the walk goes on.
    """

    def __init__(self, walker: FileSystemWalker | None = None):
        self._walker = walker or FileSystemWalker()

    def scan(self, root: Path | str) -> ScanReport:
        root_path = Path(root)
        report = ScanReport(root=str(root_path))
        for entry in self._walker.iter_entries(root_path):
            report.visited += 1
            if entry.error is not None:
                self._warn(report, str(entry.path), entry.error, entry.message)
                continue
            if entry.is_dir or not self._walker.is_supported_file(entry.path):
                continue
            built = build_record(root_path, entry.path)
            if not built.ok or built.data is None:
                self._warn(report, str(entry.path), ScanWarningKind.RELPATH_FAILED, built.error or "")
                continue
            report.records.append(built.data)

        logger.info(
            "Scanned %s: %d entries, %d videos, %d warnings",
            root_path,
            report.visited,
            len(report.records),
            len(report.warnings),
        )
        return report

    @staticmethod
    def _warn(report: ScanReport, path: str, kind: ScanWarningKind, message: str) -> None:
        logger.warning("Skipping %s (%s): %s", path, kind.value, message)
        report.warnings.append(ScanWarning(path=path, kind=kind, message=message))


def scan(root: Path | str) -> ScanReport:
    """Scan `root` with the default walker."""
    return IndexScanner().scan(root)
