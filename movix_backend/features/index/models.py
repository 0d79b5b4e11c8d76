"""
Value types shared by the scanner, the store and the API.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ...shared import ScanWarningKind


@dataclass(frozen=True)
class MediaRecord:
    """One indexed video: base name, root-relative path and containing folder."""

    file_name: str
    path: str
    folder: str

    def to_dict(self) -> dict[str, str]:
        return {"FileName": self.file_name, "Path": self.path, "Folder": self.folder}

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "MediaRecord":
        return cls(
            file_name=str(row.get("file_name") or ""),
            path=str(row.get("path") or ""),
            folder=str(row.get("folder") or ""),
        )


@dataclass(frozen=True)
class ScanWarning:
    path: str
    kind: ScanWarningKind
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"path": self.path, "kind": self.kind.value, "message": self.message}


@dataclass
class ScanReport:
    root: str
    records: list[MediaRecord] = field(default_factory=list)
    warnings: list[ScanWarning] = field(default_factory=list)
    visited: int = 0


@dataclass(frozen=True)
class InsertFailure:
    record: MediaRecord
    code: str
    error: str


@dataclass
class SeedReport:
    inserted: int = 0
    skipped: int = 0
    failures: list[InsertFailure] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.inserted + self.skipped + len(self.failures)
