"""Folder browsing."""
from .service import FolderTreeResolver
from .tree import FolderNode, immediate_children

__all__ = ["FolderNode", "FolderTreeResolver", "immediate_children"]
