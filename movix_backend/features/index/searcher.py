"""
Index searcher - filename lookups.
"""
from __future__ import annotations

from ...config import SEARCH_MAX_QUERY_LENGTH
from ...shared import ErrorCode, Result, get_logger
from .models import MediaRecord
from .store import MovieStore

logger = get_logger(__name__)

MAX_SEARCH_QUERY_LENGTH = SEARCH_MAX_QUERY_LENGTH


class IndexSearcher:
    """
    Substring search over file names.

    Matching is case-insensitive for ASCII letters (SQLite `LIKE`), so "mov"
    finds "MyMovie.mp4". Wildcards in the query match literally.
    """

    def __init__(self, store: MovieStore):
        self.store = store

    async def search_by_name(self, query: str | None) -> Result[list[MediaRecord]]:
        text = str(query or "")
        if not text:
            return Result.Err(ErrorCode.INVALID_INPUT, "Search query must not be empty")
        if len(text) > MAX_SEARCH_QUERY_LENGTH:
            return Result.Err(
                ErrorCode.INVALID_INPUT,
                f"Search query too long (max {MAX_SEARCH_QUERY_LENGTH} characters)",
            )
        res = await self.store.query_by_name_substring(text)
        if res.ok:
            logger.debug("Search %r matched %d file(s)", text, len(res.data or []))
        return res

    async def find_by_name(self, file_name: str | None) -> Result[MediaRecord]:
        """Exact file-name lookup."""
        name = str(file_name or "")
        if not name:
            return Result.Err(ErrorCode.INVALID_INPUT, "File name must not be empty")
        res = await self.store.query_by_file_name(name)
        if not res.ok:
            return Result.Err(res.code, res.error or "Query failed")
        rows = res.data or []
        if not rows:
            return Result.Err(ErrorCode.NOT_FOUND, f"Unknown file: {name}")
        return Result.Ok(rows[0])
