"""
Service lookup for route handlers.
"""
from typing import Any

from aiohttp import web

from movix_backend.shared import ErrorCode, Result

APP_KEY_SERVICES: web.AppKey[dict] = web.AppKey("movix_services", dict)


def _require_services(request: web.Request) -> tuple[dict[str, Any] | None, Result[Any] | None]:
    services = request.app.get(APP_KEY_SERVICES)
    if services:
        return services, None
    return None, Result.Err(ErrorCode.SERVICE_UNAVAILABLE, "Services are unavailable")
