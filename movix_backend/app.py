"""
Application factory.

The index is built inside the app's cleanup context, so the scan and the
seed complete before the listening socket accepts a request, and the
database is closed when the app shuts down.
"""
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable
from pathlib import Path

from aiohttp import web

from .config import INDEX_DB, SCAN_ROOT
from .deps import build_services, dispose_services
from .observability import install_asyncio_exception_handler
from .routes import register_routes
from .routes.core import APP_KEY_SERVICES
from .shared import get_logger, log_success

logger = get_logger(__name__)


class StartupError(RuntimeError):
    """The index could not be opened or seeded; the server must not start."""


def _index_context(
    scan_root: Path, db_path: str, seed: bool
) -> Callable[[web.Application], AsyncIterator[None]]:
    async def _ctx(app: web.Application) -> AsyncIterator[None]:
        install_asyncio_exception_handler(asyncio.get_running_loop())

        services_res = await build_services(db_path)
        if not services_res.ok or not services_res.data:
            raise StartupError(f"Failed to open index database: {services_res.error}")
        services = services_res.data

        if seed:
            seed_res = await services["index"].seed(scan_root)
            if not seed_res.ok:
                await dispose_services(services)
                raise StartupError(f"Failed to seed index: {seed_res.error}")
            services["seed_summary"] = seed_res.data
            log_success(
                logger,
                "Index ready: %d new, %d already indexed",
                seed_res.data["inserted"],
                seed_res.data["skipped"],
            )

        # The dict itself was installed before the app froze; fill it in place.
        app[APP_KEY_SERVICES].update(services)
        try:
            yield
        finally:
            app[APP_KEY_SERVICES].clear()
            await dispose_services(services)

    return _ctx


def create_app(
    scan_root: Path | str | None = None,
    db_path: str | None = None,
    *,
    seed: bool = True,
) -> web.Application:
    """
    Build the aiohttp application.

    Args:
        scan_root: Directory to index and serve under `/public` (default: config.SCAN_ROOT)
        db_path: SQLite file (default: config.INDEX_DB)
        seed: Scan and seed at startup; tests that preload the store disable it
    """
    root = Path(scan_root) if scan_root is not None else SCAN_ROOT
    db_file = str(db_path) if db_path is not None else INDEX_DB

    app = web.Application()
    app[APP_KEY_SERVICES] = {}
    app.cleanup_ctx.append(_index_context(root, db_file, seed))
    register_routes(app, public_root=root)
    logger.info("Scan root: %s", root)
    logger.info("Index database: %s", db_file)
    return app
