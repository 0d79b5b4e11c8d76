"""
Route registration system.
Coordinates all route handlers and registers them with an aiohttp app.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path

from aiohttp import web

from movix_backend.config import API_PREFIX, PUBLIC_PREFIX
from movix_backend.observability import ensure_observability
from movix_backend.shared import get_logger

from .handlers import (
    register_file_routes,
    register_folder_routes,
    register_page_routes,
    register_search_routes,
)

_APP_KEY_SECURITY_MIDDLEWARES_INSTALLED: web.AppKey[bool] = web.AppKey(
    "_movix_security_middlewares_installed", bool
)
_APP_KEY_ROUTES_REGISTERED: web.AppKey[bool] = web.AppKey("_movix_routes_registered", bool)

logger = get_logger(__name__)


@web.middleware
async def security_headers_middleware(
    request: web.Request,
    handler: Callable[[web.Request], Awaitable[web.StreamResponse]],
) -> web.StreamResponse:
    """Apply strict security headers to API responses only."""
    response = await handler(request)
    if not request.path.startswith(API_PREFIX):
        return response

    # API responses should never be treated as a document.
    response.headers.setdefault("Content-Security-Policy", "default-src 'none'")
    response.headers.setdefault("X-Content-Type-Options", "nosniff")
    response.headers.setdefault("X-Frame-Options", "DENY")
    response.headers.setdefault("Referrer-Policy", "strict-origin-when-cross-origin")
    response.headers.setdefault("Cache-Control", "no-store, no-cache, must-revalidate")
    return response


def _install_security_middlewares(app: web.Application) -> None:
    if app.get(_APP_KEY_SECURITY_MIDDLEWARES_INSTALLED):
        return
    app.middlewares.append(security_headers_middleware)
    app[_APP_KEY_SECURITY_MIDDLEWARES_INSTALLED] = True


def build_route_table() -> web.RouteTableDef:
    """Collect every handler into a fresh RouteTableDef."""
    routes = web.RouteTableDef()
    register_page_routes(routes)
    register_folder_routes(routes)
    register_search_routes(routes)
    register_file_routes(routes)
    return routes


def register_routes(app: web.Application, public_root: Path | str | None = None) -> None:
    """
    Register middlewares, API routes and (optionally) the static `/public`
    mount onto an aiohttp application.
    """
    if app.get(_APP_KEY_ROUTES_REGISTERED):
        logger.debug("register_routes(app) skipped: routes already registered on this app")
        return

    ensure_observability(app)
    _install_security_middlewares(app)
    app.add_routes(build_route_table())

    if public_root is not None:
        if Path(public_root).is_dir():
            app.router.add_static(PUBLIC_PREFIX, Path(public_root), follow_symlinks=False)
            logger.info("  GET %s/{path} -> %s", PUBLIC_PREFIX, public_root)
        else:
            logger.warning("Not serving %s: %s is not a directory", PUBLIC_PREFIX, public_root)

    app[_APP_KEY_ROUTES_REGISTERED] = True
    logger.info("=" * 60)
    logger.info("Routes registered:")
    logger.info("  GET /")
    logger.info("  GET /api/folder/{path}")
    logger.info("  GET /api/search/{name}")
    logger.info("  GET /api/file/{name}")
    logger.info("=" * 60)
