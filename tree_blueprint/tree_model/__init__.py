"""Domain model for editable blueprint trees.

This package contains the non-UI tree primitives:
- folder/file node datatypes with nested children
- path lookups by id and by display names
- path-copying replacement used by the mutation engine
- the monotonic node-id factory
"""

from __future__ import annotations

from .ids import NodeIdFactory, to_base36
from .types import (
    FILE,
    FOLDER,
    FileNode,
    FolderNode,
    TreeNode,
    coerce_to_folder,
    duplicate_ids,
    find_node,
    find_path,
    find_path_by_names,
    is_file,
    is_folder,
    iter_nodes,
    replace_at_path,
    tree_ids,
)

__all__ = [
    "FOLDER",
    "FILE",
    "FileNode",
    "FolderNode",
    "TreeNode",
    "is_folder",
    "is_file",
    "coerce_to_folder",
    "find_path",
    "find_node",
    "find_path_by_names",
    "replace_at_path",
    "iter_nodes",
    "tree_ids",
    "duplicate_ids",
    "NodeIdFactory",
    "to_base36",
]
