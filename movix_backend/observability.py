"""
Observability helpers (request id + timing) for aiohttp routes.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any
from uuid import uuid4

from aiohttp import web

from .config import API_PREFIX, OBS_LOG_ALL, OBS_SLOW_MS
from .shared import get_logger, request_id_var

# OSError errno codes that indicate client disconnect (not server-side issues)
_CLIENT_DISCONNECT_ERRNO = frozenset({
    104,    # ECONNRESET
    32,     # EPIPE
    9,      # EBADF
    10053,  # WSAECONNABORTED
    10054,  # WSAECONNRESET
})

logger = get_logger(__name__)

_APPKEY_OBS_INSTALLED = web.AppKey("movix_observability_installed", bool)
MS_PER_S = 1000.0


def _is_client_disconnect(exc: BaseException) -> bool:
    if isinstance(exc, (ConnectionResetError, BrokenPipeError, ConnectionAbortedError)):
        return True
    if isinstance(exc, OSError):
        return getattr(exc, "errno", None) in _CLIENT_DISCONNECT_ERRNO
    return False


def _new_request_id() -> str:
    return uuid4().hex


def _get_request_id(request: web.Request) -> str:
    rid = (request.headers.get("X-Request-ID") or "").strip()
    return rid or _new_request_id()


def _should_log(request: web.Request, *, status: int | None, duration_ms: float) -> bool:
    if not request.path.startswith(API_PREFIX):
        return False
    if status is not None and status >= 400:
        return True
    if OBS_LOG_ALL:
        return True
    return duration_ms >= OBS_SLOW_MS


def build_request_log_fields(request: web.Request, response_status: int | None = None) -> dict[str, Any]:
    """Build a JSON-serializable dict of request/response fields for logs."""
    return {
        "request_id": request.get("movix_request_id"),
        "method": request.method,
        "path": request.path,
        "status": response_status,
        "duration_ms": round(float(request.get("movix_duration_ms") or 0.0), 2),
    }


def _emit_request_log(
    request: web.Request,
    *,
    status: int | None,
    duration_ms: float,
    error: str | None,
) -> None:
    if not _should_log(request, status=status, duration_ms=duration_ms):
        return
    fields = build_request_log_fields(request, response_status=status)
    if error:
        fields["error"] = error
    message = "%s %s -> %s in %.1fms"
    args = (fields["method"], fields["path"], status, duration_ms)
    if status is not None and status >= 500:
        logger.error(message, *args, extra={"request_fields": fields})
    elif status is not None and status >= 400:
        logger.warning(message, *args, extra={"request_fields": fields})
    else:
        logger.info(message + " (slow)", *args, extra={"request_fields": fields})


@web.middleware
async def request_context_middleware(request: web.Request, handler):
    """Add request-id correlation and log failed or slow API requests."""
    rid = _get_request_id(request)
    request["movix_request_id"] = rid
    token = request_id_var.set(rid)
    start = time.perf_counter()
    status: int | None = None
    error: str | None = None
    try:
        response = await handler(request)
        status = int(getattr(response, "status", 200) or 200)
        response.headers["X-Request-ID"] = rid
        return response
    except web.HTTPException as exc:
        status = int(exc.status)
        error = exc.reason
        exc.headers["X-Request-ID"] = rid
        raise
    except Exception as exc:
        status = 500
        error = f"{exc.__class__.__name__}: {exc}"
        raise
    finally:
        duration_ms = (time.perf_counter() - start) * MS_PER_S
        request["movix_duration_ms"] = duration_ms
        request_id_var.reset(token)
        _emit_request_log(request, status=status, duration_ms=duration_ms, error=error)


def ensure_observability(app: web.Application) -> None:
    """Install the request-context middleware once per app."""
    if app.get(_APPKEY_OBS_INSTALLED):
        return
    app[_APPKEY_OBS_INSTALLED] = True
    app.middlewares.append(request_context_middleware)


def install_asyncio_exception_handler(loop: asyncio.AbstractEventLoop) -> None:
    """
    Silence benign client disconnect errors raised at the transport level,
    after middleware has already finished.
    """
    original_handler = loop.get_exception_handler()

    def _quiet_exception_handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        exc = context.get("exception")
        if exc is not None and _is_client_disconnect(exc):
            return
        if original_handler is not None:
            original_handler(loop, context)
        else:
            loop.default_exception_handler(context)

    loop.set_exception_handler(_quiet_exception_handler)
    logger.debug("Installed asyncio exception handler for client disconnect errors")
