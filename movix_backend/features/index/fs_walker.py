"""
FileSystemWalker - filesystem traversal for the video scan.

The walker yields every entry below a root as `WalkEntry(path, is_dir)`.
Entries that cannot be inspected come back with `error` set instead of
aborting the walk, so the scanner decides what to report.
"""
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from ...shared import ScanWarningKind, get_logger, is_video_file

logger = get_logger(__name__)


@dataclass(frozen=True)
class WalkEntry:
    path: Path
    is_dir: bool
    error: ScanWarningKind | None = None
    message: str = ""


class FileSystemWalker:
    """
    Walks a directory tree depth-first with `os.scandir`.

    Entries inside one directory are emitted in name order; symlinked
    directories are reported but not descended into.
    """

    def iter_entries(self, root: Path) -> Iterator[WalkEntry]:
        """
        Generator - iterate over every entry below `root` (streaming).

        Args:
            root: Directory to walk

        Yields:
            WalkEntry per file or directory, or per failure
        """
        # Iterative scandir is generally faster than os.walk on large trees/NAS shares.
        stack: list[Path] = [root]
        while stack:
            current = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = sorted(it, key=lambda e: e.name)
            except OSError as exc:
                yield WalkEntry(current, True, ScanWarningKind.LIST_FAILED, str(exc))
                continue

            subdirs: list[Path] = []
            for entry in entries:
                entry_path = Path(entry.path)
                try:
                    is_dir = entry.is_dir(follow_symlinks=False)
                    if not is_dir:
                        # Files (and symlinks to files) must be stat-able to be indexed.
                        entry.stat(follow_symlinks=True)
                except OSError as exc:
                    yield WalkEntry(entry_path, False, ScanWarningKind.STAT_FAILED, str(exc))
                    continue
                yield WalkEntry(entry_path, is_dir)
                if is_dir:
                    subdirs.append(entry_path)
            stack.extend(reversed(subdirs))

    @staticmethod
    def is_supported_file(path: Path) -> bool:
        return is_video_file(path.name)
