"""Canonical ordering and text rendering of blueprint trees.

``normalize`` re-sorts a copy of the tree (folders first, then names in
case-sensitive order). It is applied only at export time; the live tree keeps
the user's order. Two text forms are available: connector-drawn tree lines
and a Markdown bullet list.
"""

from __future__ import annotations

from enum import Enum

from ..tree_model import FileNode, FolderNode, TreeNode

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "
BULLET_INDENT = "  "


class ExportStyle(str, Enum):
    TREE = "tree"
    BULLETS = "bullets"


def sort_key(node: TreeNode) -> tuple[bool, str]:
    """Folders before files, then plain code-point order by name."""
    return (not isinstance(node, FolderNode), node.name)


def normalize(tree: TreeNode) -> TreeNode:
    """Return a sorted copy of ``tree`` (folders first at every level)."""
    if not isinstance(tree, FolderNode):
        return FileNode(id=tree.id, name=tree.name)

    # Post-order on an explicit stack keeps deep trees clear of the recursion limit.
    built: dict[int, TreeNode] = {}
    stack: list[tuple[TreeNode, bool]] = [(tree, False)]
    while stack:
        node, expanded = stack.pop()
        if not isinstance(node, FolderNode):
            built[id(node)] = FileNode(id=node.id, name=node.name)
            continue
        if not expanded:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
            continue
        children = sorted((built[id(child)] for child in node.children), key=sort_key)
        built[id(node)] = FolderNode(id=node.id, name=node.name, children=tuple(children))
    return built[id(tree)]


def _push_tree_rows(stack: list[tuple[TreeNode, str, bool]], folder: FolderNode, prefix: str) -> None:
    last_idx = len(folder.children) - 1
    for idx in range(last_idx, -1, -1):
        stack.append((folder.children[idx], prefix, idx == last_idx))


def render_tree(tree: TreeNode) -> str:
    """Render ``tree`` as ``.root`` followed by connector-drawn rows."""
    lines: list[str] = [f".{tree.name}"]
    stack: list[tuple[TreeNode, str, bool]] = []
    if isinstance(tree, FolderNode):
        _push_tree_rows(stack, tree, "")
    while stack:
        node, prefix, last = stack.pop()
        lines.append(f"{prefix}{LAST_BRANCH if last else BRANCH}{node.name}")
        if isinstance(node, FolderNode):
            _push_tree_rows(stack, node, prefix + (SPACE_PREFIX if last else PIPE_PREFIX))
    return "\n".join(lines) + "\n"


def render_bullets(tree: TreeNode) -> str:
    """Render ``tree`` as a nested Markdown list with ``/`` after folders."""
    lines: list[str] = []
    stack: list[tuple[TreeNode, int]] = [(tree, 0)]
    while stack:
        node, depth = stack.pop()
        if isinstance(node, FolderNode):
            lines.append(f"{BULLET_INDENT * depth}- {node.name}/")
            stack.extend((child, depth + 1) for child in reversed(node.children))
        else:
            lines.append(f"{BULLET_INDENT * depth}- {node.name}")
    return "\n".join(lines) + "\n"


def render(tree: TreeNode, style: ExportStyle | str = ExportStyle.TREE) -> str:
    """Normalize ``tree`` and render it in ``style``."""
    try:
        resolved = ExportStyle(style)
    except ValueError as exc:
        raise ValueError(f"unknown export style: {style!r}") from exc
    normalized = normalize(tree)
    if resolved is ExportStyle.BULLETS:
        return render_bullets(normalized)
    return render_tree(normalized)


__all__ = [
    "ExportStyle",
    "sort_key",
    "normalize",
    "render_tree",
    "render_bullets",
    "render",
]
