"""
Build MediaRecords from filesystem paths.
"""
from __future__ import annotations

import posixpath
from pathlib import Path

from ...path_utils import ROOT_FOLDER, to_posix
from ...shared import ErrorCode, Result
from .models import MediaRecord


def record_from_relative(rel_path: str) -> MediaRecord:
    """
    Build a record from a root-relative path in any separator convention.

    "A\\B\\x.mp4" and "A/B/x.mp4" both give path "A/B/x.mp4", folder "A/B".
    Files directly in the root get folder ".".
    """
    rel = to_posix(rel_path).strip("/")
    if rel.startswith("./"):
        rel = rel[2:]
    folder = posixpath.dirname(rel) or ROOT_FOLDER
    return MediaRecord(file_name=posixpath.basename(rel), path=rel, folder=folder)


def build_record(root: Path, file_path: Path) -> Result[MediaRecord]:
    """Compute the record for `file_path`, which must live below `root`."""
    try:
        rel = file_path.relative_to(root)
    except ValueError as exc:
        return Result.Err(ErrorCode.INVALID_INPUT, f"Not below scan root: {exc}")
    if not rel.parts:
        return Result.Err(ErrorCode.INVALID_INPUT, "Path is the scan root itself")
    return Result.Ok(record_from_relative(str(rel)))
