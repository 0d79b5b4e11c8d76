"""Shared utilities for the Movix video index."""
from .errors import sanitize_error_message
from .log import get_logger, log_structured, log_success, request_id_var
from .result import Result
from .time import timer
from .types import VIDEO_EXTENSIONS, ErrorCode, ScanWarningKind, is_video_file

__all__ = [
    "Result",
    "get_logger",
    "log_success",
    "log_structured",
    "request_id_var",
    "timer",
    "ErrorCode",
    "ScanWarningKind",
    "VIDEO_EXTENSIONS",
    "is_video_file",
    "sanitize_error_message",
]
