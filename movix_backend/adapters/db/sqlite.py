"""
SQLite database connection manager.

Implementation note:
- This adapter uses `aiosqlite`; every connection runs its statements on its
  own worker thread, so aiohttp handlers can await queries directly.
- Connections are pooled and opened in WAL mode, which lets many requests
  read concurrently while the startup seed writes.

Critical guarantee:
- The query API never raises to callers; it returns `Result(...)`.
  Only the constructor raises, when the database file cannot be opened.
"""

from __future__ import annotations

import asyncio
import random
import sqlite3
from contextlib import closing
from pathlib import Path
from queue import Empty, Queue
from typing import Any

import aiosqlite

from ...config import DB_MAX_CONNECTIONS, DB_QUERY_TIMEOUT, DB_TIMEOUT
from ...shared import ErrorCode, Result, get_logger

logger = get_logger(__name__)

SQLITE_BUSY_TIMEOUT_MS = max(1000, int(float(DB_TIMEOUT) * 1000))
# Negative cache_size is in KiB. -16000 ~= 16 MiB cache.
SQLITE_CACHE_SIZE_KIB = -16000


def is_write_sql(query: str) -> bool:
    q = str(query or "").lstrip()
    if not q:
        return False
    head = q.split(None, 1)[0].upper()
    return head not in ("SELECT", "PRAGMA", "WITH", "EXPLAIN")


def is_locked_error(exc: Exception) -> bool:
    msg = str(exc).lower()
    return "database is locked" in msg or "database table is locked" in msg


def rows_to_dicts(rows: Any) -> list[dict[str, Any]]:
    if not rows:
        return []
    return [dict(r) for r in rows]


class Sqlite:
    """
    Connection pool manager for SQLite (aiosqlite-backed).

    Reads run in parallel on pooled connections; writes are serialized
    through an asyncio lock so the seed never fights itself for the WAL.
    """

    def __init__(
        self,
        db_path: str,
        max_connections: int | None = None,
        timeout: float | None = None,
        query_timeout: float | None = None,
    ):
        self.db_path = Path(db_path)
        max_conn = int(max_connections) if max_connections is not None else int(DB_MAX_CONNECTIONS or 8)
        self._max_conn_limit = max(1, max_conn)
        self._pool: Queue[aiosqlite.Connection] = Queue(maxsize=self._max_conn_limit)
        self._async_sem: asyncio.Semaphore | None = None
        self._write_lock: asyncio.Lock | None = None
        self._active_conns: set[aiosqlite.Connection] = set()
        self._closed = False

        self._timeout = float(timeout if timeout is not None else DB_TIMEOUT)
        self._query_timeout = float(query_timeout if query_timeout is not None else (DB_QUERY_TIMEOUT or 0.0))
        self._lock_retry_attempts = 6
        self._lock_retry_base_seconds = 0.05
        self._lock_retry_max_seconds = 0.75

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self) -> None:
        """Open the file once synchronously so an unusable path fails at construction."""
        with closing(sqlite3.connect(str(self.db_path), timeout=self._timeout)) as conn:
            conn.execute("PRAGMA journal_mode=WAL")
            conn.execute("SELECT 1").fetchone()

    async def _sleep_backoff(self, attempt: int) -> None:
        base = float(self._lock_retry_base_seconds)
        max_s = float(self._lock_retry_max_seconds)
        delay = min(max_s, base * (2 ** max(0, attempt)))
        delay = delay + (random.random() * 0.03)
        logger.debug("DB lock backoff: attempt=%d delay=%.3fs", int(attempt), float(delay))
        await asyncio.sleep(delay)

    async def _apply_connection_pragmas(self, conn: aiosqlite.Connection) -> None:
        await conn.execute("PRAGMA journal_mode=WAL")
        await conn.execute("PRAGMA synchronous=NORMAL")
        await conn.execute(f"PRAGMA cache_size={SQLITE_CACHE_SIZE_KIB}")
        await conn.execute("PRAGMA temp_store=MEMORY")
        await conn.execute(f"PRAGMA busy_timeout = {SQLITE_BUSY_TIMEOUT_MS}")

    async def _create_connection(self) -> aiosqlite.Connection:
        # Autocommit mode; writes commit explicitly.
        conn = await aiosqlite.connect(str(self.db_path), timeout=self._timeout, isolation_level=None)
        conn.row_factory = sqlite3.Row
        await self._apply_connection_pragmas(conn)
        return conn

    async def _acquire_connection_async(self) -> aiosqlite.Connection:
        if self._closed:
            raise RuntimeError("Database is closed")
        if self._async_sem is None:
            self._async_sem = asyncio.Semaphore(self._max_conn_limit)
        sem = self._async_sem
        await sem.acquire()
        try:
            try:
                conn = self._pool.get_nowait()
            except Empty:
                conn = await self._create_connection()
            self._active_conns.add(conn)
            return conn
        except BaseException:
            sem.release()
            raise

    async def _release_connection_async(self, conn: aiosqlite.Connection) -> None:
        try:
            self._active_conns.discard(conn)
            if self._closed or self._pool.full():
                await conn.close()
            else:
                self._pool.put_nowait(conn)
        finally:
            if self._async_sem is not None:
                self._async_sem.release()

    def _get_write_lock(self) -> asyncio.Lock:
        if self._write_lock is None:
            self._write_lock = asyncio.Lock()
        return self._write_lock

    async def _with_query_timeout(self, coro):
        timeout = float(self._query_timeout or 0)
        if timeout > 0:
            try:
                return await asyncio.wait_for(coro, timeout=timeout)
            except asyncio.TimeoutError:
                return Result.Err(ErrorCode.TIMEOUT, "Database operation timed out")
        return await coro

    async def _run_with_lock_retry(self, op):
        for attempt in range(self._lock_retry_attempts + 1):
            try:
                return await op()
            except sqlite3.OperationalError as exc:
                if is_locked_error(exc) and attempt < self._lock_retry_attempts:
                    await self._sleep_backoff(attempt)
                    continue
                raise
        return Result.Err(ErrorCode.DB_ERROR, "Query failed after retries")

    async def _execute_on_conn(
        self,
        conn: aiosqlite.Connection,
        query: str,
        params: tuple | None,
        fetch: bool,
    ) -> Result[Any]:
        async def _op() -> Result[Any]:
            cursor = await conn.execute(query, params or ())
            try:
                if fetch:
                    rows = await cursor.fetchall()
                    return Result.Ok(rows_to_dicts(rows))
                await conn.commit()
                rowcount = getattr(cursor, "rowcount", None)
                return Result.Ok(
                    int(rowcount) if rowcount is not None and rowcount >= 0 else 0,
                    lastrowid=getattr(cursor, "lastrowid", None),
                )
            finally:
                await cursor.close()

        if is_write_sql(query):
            async with self._get_write_lock():
                return await self._run_with_lock_retry(_op)
        return await self._run_with_lock_retry(_op)

    async def _execute_async(self, query: str, params: tuple | None, fetch: bool) -> Result[Any]:
        try:
            conn = await self._acquire_connection_async()
        except Exception as exc:
            logger.error("Failed to acquire database connection: %s", exc)
            return Result.Err(ErrorCode.DB_ERROR, f"Connection failed: {exc}")
        try:
            return await self._execute_on_conn(conn, query, params, fetch)
        except sqlite3.IntegrityError as exc:
            logger.warning("Integrity error: %s", exc)
            return Result.Err(ErrorCode.DB_ERROR, f"Integrity error: {exc}")
        except sqlite3.OperationalError as exc:
            if "interrupted" in str(exc).lower():
                return Result.Err(ErrorCode.TIMEOUT, "Database operation interrupted (query timeout)")
            logger.error("Operational error: %s", exc)
            return Result.Err(ErrorCode.DB_ERROR, f"Operational error: {exc}")
        except sqlite3.DatabaseError as exc:
            logger.error("Database error: %s", exc)
            return Result.Err(ErrorCode.DB_ERROR, str(exc))
        except ValueError as exc:
            # aiosqlite raises ValueError when the connection was closed underneath us.
            logger.error("Database connection unusable: %s", exc)
            return Result.Err(ErrorCode.DB_ERROR, str(exc))
        finally:
            await self._release_connection_async(conn)

    async def aexecute(self, query: str, params: tuple | None = None, fetch: bool = False) -> Result[Any]:
        """
        Execute one SQL statement.

        Returns rows as dicts when `fetch` is set, otherwise the affected row
        count (with `lastrowid` in `meta`).
        """
        return await self._with_query_timeout(self._execute_async(query, params, fetch))

    async def aquery(self, sql: str, params: tuple | None = None) -> Result[list[dict[str, Any]]]:
        """Execute a SELECT query and return rows."""
        return await self.aexecute(sql, params, fetch=True)

    async def aexecutescript(self, script: str) -> Result[bool]:
        """Execute a multi-statement SQL script."""
        try:
            conn = await self._acquire_connection_async()
        except Exception as exc:
            return Result.Err(ErrorCode.DB_ERROR, f"Connection failed: {exc}")

        async def _op() -> Result[bool]:
            await conn.executescript(script)
            await conn.commit()
            return Result.Ok(True)

        try:
            async with self._get_write_lock():
                return await self._run_with_lock_retry(_op)
        except (sqlite3.DatabaseError, ValueError) as exc:
            logger.error("Script execution error: %s", exc)
            return Result.Err(ErrorCode.DB_ERROR, str(exc))
        finally:
            await self._release_connection_async(conn)

    async def ahas_table(self, table_name: str) -> bool:
        """Return True if `table_name` exists in sqlite_master."""
        result = await self.aquery(
            "SELECT name FROM sqlite_master WHERE type='table' AND name = ?",
            (table_name,),
        )
        return bool(result.ok and result.data)

    async def aget_schema_version(self) -> int:
        """Get the schema version from the `metadata` table (0 if missing)."""
        if not await self.ahas_table("metadata"):
            return 0
        result = await self.aquery("SELECT value FROM metadata WHERE key = 'schema_version'")
        if result.ok and result.data:
            try:
                return int(result.data[0]["value"])
            except (ValueError, KeyError, TypeError):
                logger.warning("Invalid schema_version value in database")
        return 0

    async def aset_schema_version(self, version: int) -> Result[Any]:
        """Set the schema version in the `metadata` table."""
        return await self.aexecute(
            "INSERT OR REPLACE INTO metadata (key, value) VALUES ('schema_version', ?)",
            (str(version),),
        )

    async def aclose(self) -> None:
        """Close every pooled and checked-out connection."""
        self._closed = True
        while True:
            try:
                conn = self._pool.get_nowait()
            except Empty:
                break
            try:
                await conn.close()
            except Exception as exc:
                logger.debug("Error closing pooled connection: %s", exc)
        for conn in list(self._active_conns):
            try:
                await conn.close()
            except Exception as exc:
                logger.debug("Error closing active connection: %s", exc)
        self._active_conns.clear()
        self._async_sem = None
