"""
Movie store - the `movies` table behind upsert-if-absent writes and the
read projections used by the browser and the search.

Text matching follows SQLite: `LIKE` and `COLLATE NOCASE` are
case-insensitive for ASCII letters only.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ...adapters.db.sqlite import Sqlite
from ...path_utils import ROOT_FOLDER
from ...shared import ErrorCode, Result, get_logger, log_success
from .models import InsertFailure, MediaRecord, SeedReport

logger = get_logger(__name__)

_SELECT_COLUMNS = "SELECT file_name, path, folder FROM movies"
_INSERT_IF_ABSENT = (
    "INSERT INTO movies (file_name, path, folder) VALUES (?, ?, ?) "
    "ON CONFLICT(file_name) DO NOTHING"
)


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so user text matches literally (ESCAPE '\\')."""
    return str(value).replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _to_records(result: Result[list[dict[str, Any]]]) -> Result[list[MediaRecord]]:
    if not result.ok:
        return Result.Err(result.code or ErrorCode.DB_ERROR, result.error or "Query failed")
    return Result.Ok([MediaRecord.from_row(row) for row in (result.data or [])])


class MovieStore:
    """Data access for MediaRecords. Every method returns a Result."""

    def __init__(self, db: Sqlite):
        self.db = db

    async def upsert_if_absent(self, records: Iterable[MediaRecord]) -> Result[SeedReport]:
        """
        Insert each record unless a row with the same file_name exists.

        Existing rows are never touched. A failing record is collected in
        the report and the batch continues.
        """
        report = SeedReport()
        for record in records:
            if not record.file_name:
                report.failures.append(InsertFailure(record, ErrorCode.INVALID_INPUT.value, "Empty file name"))
                continue
            res = await self.db.aexecute(_INSERT_IF_ABSENT, (record.file_name, record.path, record.folder))
            if not res.ok:
                logger.warning("Insert failed for %s: %s", record.path, res.error)
                report.failures.append(InsertFailure(record, res.code, res.error or "Insert failed"))
                continue
            if int(res.data or 0) > 0:
                report.inserted += 1
            else:
                report.skipped += 1

        log_success(
            logger,
            "Seeded movies: %d new, %d already indexed, %d failed",
            report.inserted,
            report.skipped,
            len(report.failures),
        )
        return Result.Ok(report)

    async def query_all(self) -> Result[list[MediaRecord]]:
        return _to_records(await self.db.aquery(f"{_SELECT_COLUMNS} ORDER BY rowid"))

    async def query_folders_under(self, folder: str) -> Result[list[str]]:
        """Distinct folder values equal to `folder` or below it ("." matches all)."""
        if folder == ROOT_FOLDER:
            res = await self.db.aquery("SELECT DISTINCT folder FROM movies ORDER BY folder")
        else:
            res = await self.db.aquery(
                "SELECT DISTINCT folder FROM movies "
                "WHERE folder = ? COLLATE NOCASE OR folder LIKE ? ESCAPE '\\' ORDER BY folder",
                (folder, f"{escape_like(folder)}/%"),
            )
        if not res.ok:
            return Result.Err(res.code or ErrorCode.DB_ERROR, res.error or "Query failed")
        return Result.Ok([str(row.get("folder") or "") for row in (res.data or [])])

    async def query_by_exact_folder(self, folder: str) -> Result[list[MediaRecord]]:
        """Records living directly in `folder`, in store order."""
        return _to_records(
            await self.db.aquery(
                f"{_SELECT_COLUMNS} WHERE folder = ? COLLATE NOCASE ORDER BY rowid",
                (folder,),
            )
        )

    async def query_by_name_substring(self, needle: str) -> Result[list[MediaRecord]]:
        return _to_records(
            await self.db.aquery(
                f"{_SELECT_COLUMNS} WHERE file_name LIKE ? ESCAPE '\\' ORDER BY rowid",
                (f"%{escape_like(needle)}%",),
            )
        )

    async def query_by_file_name(self, file_name: str) -> Result[list[MediaRecord]]:
        return _to_records(
            await self.db.aquery(f"{_SELECT_COLUMNS} WHERE file_name = ?", (file_name,))
        )

    async def count(self) -> Result[int]:
        res = await self.db.aquery("SELECT COUNT(*) AS c FROM movies")
        if not res.ok:
            return Result.Err(res.code or ErrorCode.DB_ERROR, res.error or "Query failed")
        rows = res.data or []
        return Result.Ok(int(rows[0].get("c") or 0) if rows else 0)
