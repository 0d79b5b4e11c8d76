"""Backend-facing alias for shared utilities."""

from __future__ import annotations

from movix_shared import (
    VIDEO_EXTENSIONS,
    ErrorCode,
    Result,
    ScanWarningKind,
    get_logger,
    is_video_file,
    log_structured,
    log_success,
    request_id_var,
    sanitize_error_message,
    timer,
)

__all__ = [
    "Result",
    "ErrorCode",
    "ScanWarningKind",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "is_video_file",
    "sanitize_error_message",
    "VIDEO_EXTENSIONS",
    "timer",
]
