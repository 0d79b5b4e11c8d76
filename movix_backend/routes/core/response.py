"""
Response utilities for route handlers.
"""

import math

from aiohttp import web

from movix_backend.shared import ErrorCode, Result, sanitize_error_message

# Error code -> HTTP status. Anything not listed is a server-side failure.
_STATUS_BY_CODE = {
    ErrorCode.INVALID_INPUT.value: 400,
    ErrorCode.NOT_FOUND.value: 404,
    ErrorCode.SERVICE_UNAVAILABLE.value: 503,
}
_CLIENT_ERROR_CODES = frozenset({ErrorCode.INVALID_INPUT.value, ErrorCode.NOT_FOUND.value})


def status_for_code(code: str | None) -> int:
    return _STATUS_BY_CODE.get(str(code or ""), 500)


def _json_response(payload, status: int = 200) -> web.Response:
    """Serialize `payload` as strict JSON."""
    return web.json_response(_sanitize_json_payload(payload), status=status)


def _error_response(result: Result, generic_message: str) -> web.Response:
    """
    Convert a failed Result into `{"error": ...}` with the matching status.

    Client errors keep their message; server errors are sanitized so paths
    and internals never reach the client.
    """
    code = str(result.code or "")
    if code in _CLIENT_ERROR_CODES:
        message = result.error or generic_message
    else:
        message = sanitize_error_message(result.error, generic_message)
    return _json_response({"error": message}, status=status_for_code(code))


def _sanitize_json_payload(value):
    """
    Normalize payload values so they are always valid strict JSON.
    - Converts NaN/Infinity floats to None.
    - Recurses through dict/list/tuple containers.
    """
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _sanitize_json_payload(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_json_payload(v) for v in value]
    return value
