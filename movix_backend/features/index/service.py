"""
Index Service - startup scan and seed, plus search.

This service coordinates:
- IndexScanner: directory walk into MediaRecords
- MovieStore: upsert-if-absent writes and read projections
- IndexSearcher: filename lookups
"""
import asyncio
import logging
from pathlib import Path
from typing import Any

from ...adapters.db.sqlite import Sqlite
from ...shared import Result, get_logger, log_structured, timer
from .models import MediaRecord
from .scanner import IndexScanner
from .searcher import IndexSearcher
from .store import MovieStore

logger = get_logger(__name__)


class IndexService:
    """
    Builds the index once and answers filename searches.

    The seed is meant to run exactly once per process, before the HTTP
    server accepts requests; it never deletes or updates existing rows.
    """

    def __init__(self, db: Sqlite, scanner: IndexScanner | None = None):
        self.db = db
        self.store = MovieStore(db)
        self.searcher = IndexSearcher(self.store)
        self._scanner = scanner or IndexScanner()

    async def seed(self, root: Path | str) -> Result[dict[str, Any]]:
        """
        Scan `root` and insert every new video.

        Returns:
            Result with counts; `meta` carries the full scan and seed reports.
        """
        root_path = Path(root)
        with timer("initial scan", logger):
            scan_report = await asyncio.to_thread(self._scanner.scan, root_path)

        seed_res = await self.store.upsert_if_absent(scan_report.records)
        if not seed_res.ok or seed_res.data is None:
            return Result.Err(seed_res.code, seed_res.error or "Seeding failed")
        seed_report = seed_res.data

        summary = {
            "root": str(root_path),
            "scanned": len(scan_report.records),
            "warnings": len(scan_report.warnings),
            "inserted": seed_report.inserted,
            "skipped": seed_report.skipped,
            "failed": len(seed_report.failures),
        }
        log_structured(logger, logging.INFO, "index seeded", **summary)
        return Result.Ok(summary, scan=scan_report, seed=seed_report)

    async def search(self, query: str | None) -> Result[list[MediaRecord]]:
        return await self.searcher.search_by_name(query)

    async def find(self, file_name: str | None) -> Result[MediaRecord]:
        return await self.searcher.find_by_name(file_name)
