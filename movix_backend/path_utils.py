"""
Shared path normalization helpers.

Every folder and path value that reaches the store or the API is
`/`-separated and relative; the virtual root is spelled ".".
"""

from __future__ import annotations

import posixpath
import re

ROOT_FOLDER = "."

_MULTI_SLASH_RE = re.compile(r"/{2,}")


def to_posix(value: str) -> str:
    """Convert host separators to `/` and collapse repeated slashes."""
    text = str(value or "").replace("\\", "/")
    return _MULTI_SLASH_RE.sub("/", text)


def normalize_folder(value: str | None) -> str:
    """
    Canonical form of a caller-supplied folder path.

    Separators become `/`, leading/trailing slashes are trimmed, and an
    empty result (or ".") denotes the virtual root.
    """
    text = to_posix(value or "").strip("/")
    if text in ("", ROOT_FOLDER):
        return ROOT_FOLDER
    if text.startswith("./"):
        text = text[2:].strip("/") or ROOT_FOLDER
    return text


def parent_folder(folder: str) -> str:
    """Directory component of `folder`; anything above the root maps to "."."""
    parent = posixpath.dirname(to_posix(folder).rstrip("/"))
    if parent in ("", "..", "/", ROOT_FOLDER):
        return ROOT_FOLDER
    return parent


def first_segment(value: str) -> str:
    return value.split("/", 1)[0]
