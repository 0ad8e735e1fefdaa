"""Folder/file node datatypes and structural lookups over blueprint trees."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

FOLDER = "folder"
FILE = "file"


@dataclass(frozen=True)
class FileNode:
    """Leaf entry of a blueprint tree."""

    id: str
    name: str

    @property
    def kind(self) -> str:
        return FILE


@dataclass(frozen=True)
class FolderNode:
    """Folder entry with ordered, recursively nested children."""

    id: str
    name: str
    children: tuple["TreeNode", ...] = ()

    @property
    def kind(self) -> str:
        return FOLDER


TreeNode = FolderNode | FileNode


def is_folder(node: object) -> bool:
    """Return whether ``node`` is a folder node."""
    return isinstance(node, FolderNode)


def is_file(node: object) -> bool:
    """Return whether ``node`` is a file node."""
    return isinstance(node, FileNode)


def coerce_to_folder(node: TreeNode) -> FolderNode:
    """Retype a file into an empty folder keeping ``id`` and ``name``.

    Folders are returned unchanged, so callers can coerce unconditionally
    before attaching a child.
    """
    if isinstance(node, FolderNode):
        return node
    return FolderNode(id=node.id, name=node.name, children=())


def find_path(tree: TreeNode, node_id: str) -> tuple[TreeNode, ...] | None:
    """Return the root-to-node path for ``node_id`` or ``None`` when absent."""
    if tree.id == node_id:
        return (tree,)
    if not isinstance(tree, FolderNode):
        return None

    # Explicit stack keeps deep trees clear of the recursion limit.
    stack: list[tuple[tuple[TreeNode, ...], int]] = [((tree,), 0)]
    while stack:
        path, child_idx = stack.pop()
        folder = path[-1]
        assert isinstance(folder, FolderNode)
        if child_idx >= len(folder.children):
            continue
        stack.append((path, child_idx + 1))
        child = folder.children[child_idx]
        child_path = path + (child,)
        if child.id == node_id:
            return child_path
        if isinstance(child, FolderNode):
            stack.append((child_path, 0))
    return None


def find_node(tree: TreeNode, node_id: str) -> TreeNode | None:
    """Return the node with ``node_id`` or ``None``."""
    path = find_path(tree, node_id)
    return path[-1] if path is not None else None


def find_path_by_names(tree: TreeNode, names: str) -> tuple[TreeNode, ...] | None:
    """Resolve a ``/``-separated path of display names below ``tree``.

    An empty string (or ``"."``) resolves to the root. When siblings share a
    name the first one in live order wins.
    """
    parts = [part for part in names.strip().split("/") if part and part != "."]
    path: tuple[TreeNode, ...] = (tree,)
    for part in parts:
        current = path[-1]
        if not isinstance(current, FolderNode):
            return None
        match = next((child for child in current.children if child.name == part), None)
        if match is None:
            return None
        path = path + (match,)
    return path


def replace_at_path(path: tuple[TreeNode, ...], new_node: TreeNode) -> TreeNode:
    """Return a new root with ``path[-1]`` swapped for ``new_node``.

    Only the ancestors on ``path`` are rebuilt; every other subtree is shared
    with the input tree.
    """
    replacement = new_node
    for depth in range(len(path) - 2, -1, -1):
        parent = path[depth]
        assert isinstance(parent, FolderNode)
        old_child = path[depth + 1]
        children = tuple(replacement if child is old_child else child for child in parent.children)
        replacement = FolderNode(id=parent.id, name=parent.name, children=children)
    return replacement


def iter_nodes(tree: TreeNode) -> Iterator[TreeNode]:
    """Yield every node in pre-order."""
    stack: list[TreeNode] = [tree]
    while stack:
        node = stack.pop()
        yield node
        if isinstance(node, FolderNode):
            stack.extend(reversed(node.children))


def tree_ids(tree: TreeNode) -> set[str]:
    return {node.id for node in iter_nodes(tree)}


def duplicate_ids(tree: TreeNode) -> set[str]:
    """Return ids that occur more than once in ``tree``."""
    seen: set[str] = set()
    duplicates: set[str] = set()
    for node in iter_nodes(tree):
        if node.id in seen:
            duplicates.add(node.id)
        seen.add(node.id)
    return duplicates


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
]
