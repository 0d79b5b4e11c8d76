"""
Shared types, enums, and constants.
"""
import os
from enum import Enum
from typing import Final

# Error codes
class ErrorCode(str, Enum):
    """Standardized error codes (string enum)."""

    # Client / validation
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"

    # Server / infrastructure
    DB_ERROR = "DB_ERROR"
    TIMEOUT = "TIMEOUT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"


class ScanWarningKind(str, Enum):
    """Why a filesystem entry was skipped during a scan."""
    STAT_FAILED = "STAT_FAILED"        # entry vanished or cannot be stat'd
    LIST_FAILED = "LIST_FAILED"        # directory cannot be listed
    RELPATH_FAILED = "RELPATH_FAILED"  # entry is not below the scan root


# Recognized video extensions (compared lower-case)
VIDEO_EXTENSIONS: Final[frozenset[str]] = frozenset({".mp4", ".mkv"})


def is_video_file(filename: str) -> bool:
    """
    Check whether a file name carries a recognized video extension.

    Args:
        filename: File name or path

    Returns:
        True for .mp4 / .mkv in any letter case
    """
    ext = os.path.splitext(filename)[1].lower()
    return ext in VIDEO_EXTENSIONS
