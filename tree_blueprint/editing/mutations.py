"""Pure edit commands over ``(tree, selected_id)``.

Every command returns an ``EditResult`` and leaves its input tree untouched.
Commands that cannot apply (unknown id, root deletion, empty or unchanged
name) return the input tree with ``changed=False`` and a short ``reason``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from ..tree_model import (
    FILE,
    FOLDER,
    FileNode,
    FolderNode,
    TreeNode,
    coerce_to_folder,
    find_path,
    replace_at_path,
)

NEW_FOLDER_NAME = "New Folder"
NEW_FILE_NAME = "New File"

REASON_NOT_FOUND = "not-found"
REASON_CANNOT_DELETE_ROOT = "cannot delete root"
REASON_EMPTY_NAME = "empty-name"
REASON_UNCHANGED = "unchanged"


@dataclass(frozen=True)
class EditResult:
    """Tree plus selection/edit pointers produced by one command."""

    tree: TreeNode
    selected_id: str | None
    editing_id: str | None = None
    changed: bool = False
    reason: str | None = None


def _unchanged(tree: TreeNode, selected_id: str | None, reason: str) -> EditResult:
    return EditResult(tree=tree, selected_id=selected_id, changed=False, reason=reason)


def new_node(kind: str, make_id: Callable[[], str]) -> TreeNode:
    """Build a placeholder-named node of ``kind``."""
    if kind == FOLDER:
        return FolderNode(id=make_id(), name=NEW_FOLDER_NAME, children=())
    if kind == FILE:
        return FileNode(id=make_id(), name=NEW_FILE_NAME)
    raise ValueError(f"unknown node kind: {kind!r}")


def create_child(
    tree: TreeNode,
    selected_id: str | None,
    kind: str,
    make_id: Callable[[], str],
) -> EditResult:
    """Append a new node as last child of the selection.

    ``None`` selects the root. A selected file is coerced into a folder first.
    The new node becomes both the selection and the edit target.
    """
    if selected_id is None or selected_id == tree.id:
        path: tuple[TreeNode, ...] | None = (tree,)
    else:
        path = find_path(tree, selected_id)
    if path is None:
        return _unchanged(tree, selected_id, REASON_NOT_FOUND)

    parent = coerce_to_folder(path[-1])
    child = new_node(kind, make_id)
    updated_parent = FolderNode(id=parent.id, name=parent.name, children=parent.children + (child,))
    return EditResult(
        tree=replace_at_path(path, updated_parent),
        selected_id=child.id,
        editing_id=child.id,
        changed=True,
    )


def create_sibling(
    tree: TreeNode,
    selected_id: str | None,
    kind: str,
    make_id: Callable[[], str],
) -> EditResult:
    """Insert a new node right after the selection in its parent.

    The root has no siblings, so a root (or missing) selection falls back to
    ``create_child``.
    """
    if selected_id is None or selected_id == tree.id:
        return create_child(tree, tree.id, kind, make_id)
    path = find_path(tree, selected_id)
    if path is None or len(path) < 2:
        return _unchanged(tree, selected_id, REASON_NOT_FOUND)

    parent = path[-2]
    current = path[-1]
    assert isinstance(parent, FolderNode)
    idx = parent.children.index(current)
    sibling = new_node(kind, make_id)
    children = parent.children[: idx + 1] + (sibling,) + parent.children[idx + 1 :]
    updated_parent = FolderNode(id=parent.id, name=parent.name, children=children)
    return EditResult(
        tree=replace_at_path(path[:-1], updated_parent),
        selected_id=sibling.id,
        editing_id=sibling.id,
        changed=True,
    )


def create_child_folder(tree: TreeNode, selected_id: str | None, make_id: Callable[[], str]) -> EditResult:
    return create_child(tree, selected_id, FOLDER, make_id)


def create_child_file(tree: TreeNode, selected_id: str | None, make_id: Callable[[], str]) -> EditResult:
    return create_child(tree, selected_id, FILE, make_id)


def create_sibling_folder(tree: TreeNode, selected_id: str | None, make_id: Callable[[], str]) -> EditResult:
    return create_sibling(tree, selected_id, FOLDER, make_id)


def create_sibling_file(tree: TreeNode, selected_id: str | None, make_id: Callable[[], str]) -> EditResult:
    return create_sibling(tree, selected_id, FILE, make_id)


def rename(tree: TreeNode, node_id: str, proposed_name: str, selected_id: str | None = None) -> EditResult:
    """Rename ``node_id`` to the trimmed ``proposed_name``.

    Empty and unchanged names are not edits. Selection is carried through
    unchanged (defaulting to ``node_id``).
    """
    selection = node_id if selected_id is None else selected_id
    path = find_path(tree, node_id)
    if path is None:
        return _unchanged(tree, selection, REASON_NOT_FOUND)

    trimmed = (proposed_name or "").strip()
    if not trimmed:
        return _unchanged(tree, selection, REASON_EMPTY_NAME)
    node = path[-1]
    if node.name == trimmed:
        return _unchanged(tree, selection, REASON_UNCHANGED)

    if isinstance(node, FolderNode):
        renamed: TreeNode = FolderNode(id=node.id, name=trimmed, children=node.children)
    else:
        renamed = FileNode(id=node.id, name=trimmed)
    return EditResult(tree=replace_at_path(path, renamed), selected_id=selection, changed=True)


def delete_node(tree: TreeNode, node_id: str, selected_id: str | None = None) -> EditResult:
    """Remove ``node_id`` and move selection to a neighbour.

    Selection falls to the sibling now at the removed index, then the previous
    sibling, then the parent.
    """
    selection = node_id if selected_id is None else selected_id
    if node_id == tree.id:
        return _unchanged(tree, selection, REASON_CANNOT_DELETE_ROOT)
    path = find_path(tree, node_id)
    if path is None:
        return _unchanged(tree, selection, REASON_NOT_FOUND)

    parent = path[-2]
    assert isinstance(parent, FolderNode)
    idx = parent.children.index(path[-1])
    children = parent.children[:idx] + parent.children[idx + 1 :]
    if idx < len(children):
        fallback_id = children[idx].id
    elif idx > 0:
        fallback_id = children[idx - 1].id
    else:
        fallback_id = parent.id
    updated_parent = FolderNode(id=parent.id, name=parent.name, children=children)
    return EditResult(
        tree=replace_at_path(path[:-1], updated_parent),
        selected_id=fallback_id,
        changed=True,
    )


__all__ = [
    "NEW_FOLDER_NAME",
    "NEW_FILE_NAME",
    "REASON_NOT_FOUND",
    "REASON_CANNOT_DELETE_ROOT",
    "REASON_EMPTY_NAME",
    "REASON_UNCHANGED",
    "EditResult",
    "new_node",
    "create_child",
    "create_sibling",
    "create_child_folder",
    "create_child_file",
    "create_sibling_folder",
    "create_sibling_file",
    "rename",
    "delete_node",
]
