"""
Database schema and migrations.
"""
from typing import Any

from ...shared import ErrorCode, Result, get_logger, log_success
from .sqlite import Sqlite

logger = get_logger(__name__)

CURRENT_SCHEMA_VERSION = 1
# Schema version history:
# 1: movies table (file_name unique) + folder index

SCHEMA_V1 = """
-- Metadata table for schema versioning
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

-- One row per discovered video; never updated, never deleted
CREATE TABLE IF NOT EXISTS movies (
    file_name TEXT UNIQUE NOT NULL,
    path TEXT NOT NULL,
    folder TEXT NOT NULL
);
"""

INDEXES = """
CREATE INDEX IF NOT EXISTS idx_movies_folder ON movies(folder);
"""


async def init_schema(db: Sqlite) -> Result[bool]:
    """Create tables and indexes if they do not exist yet."""
    logger.info("Initializing database schema...")
    result = await db.aexecutescript(SCHEMA_V1)
    if not result.ok:
        return Result.Err(ErrorCode.DB_ERROR, f"Failed to create tables: {result.error}")
    idx = await db.aexecutescript(INDEXES)
    if not idx.ok:
        return Result.Err(ErrorCode.DB_ERROR, f"Failed to create indexes: {idx.error}")
    return Result.Ok(True)


async def migrate_schema(db: Sqlite) -> Result[Any]:
    """
    Bring the database up to CURRENT_SCHEMA_VERSION.

    Existing `movies` tables created by older releases (without the metadata
    table) are adopted as-is; CREATE ... IF NOT EXISTS keeps their rows.
    """
    current = await db.aget_schema_version()
    if current > CURRENT_SCHEMA_VERSION:
        logger.warning(
            "Database schema v%s is newer than this build (v%s); continuing read-compatible",
            current,
            CURRENT_SCHEMA_VERSION,
        )
        return Result.Ok(current)

    init_res = await init_schema(db)
    if not init_res.ok:
        return init_res

    if current < CURRENT_SCHEMA_VERSION:
        ver = await db.aset_schema_version(CURRENT_SCHEMA_VERSION)
        if not ver.ok:
            return Result.Err(ErrorCode.DB_ERROR, f"Failed to record schema version: {ver.error}")
        log_success(logger, "Schema migrated v%s -> v%s", current, CURRENT_SCHEMA_VERSION)
    return Result.Ok(CURRENT_SCHEMA_VERSION)
