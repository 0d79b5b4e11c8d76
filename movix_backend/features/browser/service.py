"""
Folder browsing over the movie index.
"""
from __future__ import annotations

from ...path_utils import normalize_folder
from ...shared import ErrorCode, Result, get_logger
from ..index.store import MovieStore
from .tree import FolderNode, build_node

logger = get_logger(__name__)


class FolderTreeResolver:
    """
    Resolve a folder path into a FolderNode, fresh from the store each call.

    Store failures come back as `Result.Err`; an unknown folder is simply an
    empty node.
    """

    def __init__(self, store: MovieStore):
        self.store = store

    async def resolve(self, folder: str | None) -> Result[FolderNode]:
        target = normalize_folder(folder)

        folders_res = await self.store.query_folders_under(target)
        if not folders_res.ok:
            logger.error("Folder listing failed for %s: %s", target, folders_res.error)
            return Result.Err(folders_res.code or ErrorCode.DB_ERROR, folders_res.error or "Query failed")

        files_res = await self.store.query_by_exact_folder(target)
        if not files_res.ok:
            logger.error("File listing failed for %s: %s", target, files_res.error)
            return Result.Err(files_res.code or ErrorCode.DB_ERROR, files_res.error or "Query failed")

        node = build_node(target, folders_res.data or [], files_res.data or [])
        logger.debug(
            "Resolved %s: %d folder(s), %d file(s)", target, len(node.child_folders), len(node.files)
        )
        return Result.Ok(node)
