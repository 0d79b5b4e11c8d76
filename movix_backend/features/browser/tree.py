"""
Folder tree reconstruction over flat folder values.

The store only keeps `folder` strings; the hierarchy is rebuilt on every
request by prefix matching. Comparisons fold ASCII letters only, which is
what SQLite's `LIKE` and `COLLATE NOCASE` do.
"""
from __future__ import annotations

import string
from collections.abc import Iterable
from dataclasses import dataclass, field

from ...path_utils import ROOT_FOLDER, first_segment, parent_folder
from ..index.models import MediaRecord

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def ascii_fold(value: str) -> str:
    return str(value or "").translate(_ASCII_FOLD)


@dataclass
class FolderNode:
    """One folder view: immediate child folders, direct files, parent and cwd."""

    cwd: str
    parent: str
    child_folders: list[str] = field(default_factory=list)
    files: list[MediaRecord] = field(default_factory=list)

    def to_payload(self) -> dict:
        return {
            "folders": list(self.child_folders),
            "files": [record.to_dict() for record in self.files],
            "parent": self.parent,
            "cwd": self.cwd,
        }


def immediate_children(target: str, folder_values: Iterable[str]) -> list[str]:
    """
    Names of the folders one level below `target`.

    `folder_values` may contain anything; values that are not strictly below
    `target` (including `target` itself) contribute nothing.
    """
    target_key = ascii_fold(target)
    prefix_len = len(target) + 1
    children: set[str] = set()
    for value in folder_values:
        value = str(value or "")
        if ascii_fold(value) == target_key:
            continue
        if target == ROOT_FOLDER:
            rest = value
        else:
            if not ascii_fold(value).startswith(target_key + "/"):
                continue
            rest = value[prefix_len:]
        name = first_segment(rest)
        if not name or name == ROOT_FOLDER:
            continue
        children.add(name)
    return sorted(children)


def build_node(target: str, folder_values: Iterable[str], files: list[MediaRecord]) -> FolderNode:
    return FolderNode(
        cwd=target,
        parent=parent_folder(target),
        child_folders=immediate_children(target, folder_values),
        files=list(files),
    )
