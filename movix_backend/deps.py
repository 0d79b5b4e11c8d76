"""
Dependency injection - builds services.
Simple, debug-friendly DI without framework magic.
"""

from .adapters.db.schema import migrate_schema
from .adapters.db.sqlite import Sqlite
from .config import DB_MAX_CONNECTIONS, DB_QUERY_TIMEOUT, DB_TIMEOUT, INDEX_DB
from .features.browser import FolderTreeResolver
from .features.index import IndexService
from .shared import ErrorCode, Result, get_logger, log_success

logger = get_logger(__name__)


def _resolve_db_path(db_path: str | None) -> str:
    return db_path if db_path is not None else INDEX_DB


def _init_db_or_error(db_path: str) -> Result[Sqlite]:
    logger.info("Initializing database: %s", db_path)
    try:
        return Result.Ok(
            Sqlite(
                db_path,
                max_connections=DB_MAX_CONNECTIONS,
                timeout=DB_TIMEOUT,
                query_timeout=DB_QUERY_TIMEOUT,
            )
        )
    except Exception as exc:
        logger.error("Failed to initialize database: %s", exc)
        return Result.Err(ErrorCode.DB_ERROR, f"Failed to initialize database: {exc}")


async def _migrate_db_or_error(db: Sqlite) -> Result[bool]:
    migrate_result = await migrate_schema(db)
    if not migrate_result.ok:
        logger.error("Schema migration failed: %s", migrate_result.error)
        return Result.Err(
            migrate_result.code or ErrorCode.DB_ERROR,
            f"Failed to initialize database: {migrate_result.error}",
        )
    return Result.Ok(True)


async def build_services(db_path: str | None = None) -> Result[dict]:
    """
    Build all services (DI container).

    Args:
        db_path: Path to SQLite database (default: from config.INDEX_DB)

    Returns:
        Result[dict] with keys db, index, store, searcher, browser
    """
    logger.info("Building services...")
    db_res = _init_db_or_error(_resolve_db_path(db_path))
    if not db_res.ok or db_res.data is None:
        return Result.Err(db_res.code or ErrorCode.DB_ERROR, db_res.error or "Failed to initialize database")
    db = db_res.data

    migrate_result = await _migrate_db_or_error(db)
    if not migrate_result.ok:
        await db.aclose()
        return Result.Err(migrate_result.code, migrate_result.error or "Schema migration failed")

    index_service = IndexService(db)
    services = {
        "db": db,
        "index": index_service,
        "store": index_service.store,
        "searcher": index_service.searcher,
        "browser": FolderTreeResolver(index_service.store),
    }
    log_success(logger, "All services initialized")
    return Result.Ok(services)


async def dispose_services(services: dict | None) -> None:
    """Release service resources; errors are logged, not raised."""
    if not services:
        return
    db = services.get("db")
    if db is None:
        return
    try:
        await db.aclose()
        logger.debug("Database connection closed successfully")
    except Exception as exc:
        logger.warning("Error closing database: %s", exc, exc_info=True)
