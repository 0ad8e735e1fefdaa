"""Tree payloads crossing the UI/host boundary.

Payloads are plain JSON-style mappings::

    {"id": "...", "name": "...", "type": "folder", "children": [...]}
    {"id": "...", "name": "...", "type": "file"}

Anything arriving from the UI is untrusted. ``parse_tree_payload`` rejects a
malformed node outright and drops malformed children one by one, so a single
bad entry never discards a whole subtree.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .export.serialize import ExportStyle, render
from .export.writer import write_export
from .tree_model import FILE, FOLDER, FileNode, FolderNode, TreeNode

logger = logging.getLogger(__name__)

MESSAGE_READY = "ready"
MESSAGE_INIT = "init"
MESSAGE_EXPORT = "exportMarkdown"


@dataclass
class _FolderFrame:
    node_id: str
    name: str
    raw_children: Sequence[object]
    children: list[TreeNode] = field(default_factory=list)
    next_index: int = 0


def _check_node(value: object, seen_ids: set[str]) -> tuple[str, str, Sequence[object] | None] | None:
    """Validate one node's own fields; folders also need a ``children`` list.

    Returns ``(id, name, raw_children)`` with ``raw_children`` ``None`` for
    files, or ``None`` when the node must be dropped. Accepted ids are added
    to ``seen_ids``.
    """
    if not isinstance(value, Mapping):
        return None
    node_id = value.get("id")
    name = value.get("name")
    kind = value.get("type")
    if not isinstance(node_id, str) or not isinstance(name, str):
        return None
    if kind not in (FOLDER, FILE):
        return None
    if node_id in seen_ids:
        return None
    if kind == FILE:
        seen_ids.add(node_id)
        return node_id, name, None

    raw_children = value.get("children")
    if not isinstance(raw_children, (list, tuple)):
        return None
    seen_ids.add(node_id)
    return node_id, name, raw_children


def parse_tree_payload(value: object) -> TreeNode | None:
    """Validate an untrusted payload, returning ``None`` when it is unusable.

    The root must be a valid folder. Children with a repeated id are dropped
    like any other invalid child. Nesting depth is not limited.
    """
    seen_ids: set[str] = set()
    root = _check_node(value, seen_ids)
    if root is None or root[2] is None:
        return None

    stack = [_FolderFrame(*root)]
    while True:
        frame = stack[-1]
        if frame.next_index >= len(frame.raw_children):
            stack.pop()
            folder = FolderNode(id=frame.node_id, name=frame.name, children=tuple(frame.children))
            if not stack:
                return folder
            stack[-1].children.append(folder)
            continue

        raw_child = frame.raw_children[frame.next_index]
        frame.next_index += 1
        checked = _check_node(raw_child, seen_ids)
        if checked is None:
            continue
        node_id, name, raw_children = checked
        if raw_children is None:
            frame.children.append(FileNode(id=node_id, name=name))
        else:
            stack.append(_FolderFrame(node_id, name, raw_children))


def parse_tree_json(text: str | bytes) -> TreeNode | None:
    """Decode JSON text and validate it as a tree payload."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError, RecursionError):
        return None
    return parse_tree_payload(data)


def _node_payload(node: TreeNode) -> tuple[dict[str, object], list[dict[str, object]] | None]:
    if isinstance(node, FolderNode):
        children: list[dict[str, object]] = []
        return {"id": node.id, "name": node.name, "type": FOLDER, "children": children}, children
    return {"id": node.id, "name": node.name, "type": FILE}, None


def tree_to_payload(tree: TreeNode) -> dict[str, object]:
    """Convert a tree to its JSON-style payload."""
    root, root_children = _node_payload(tree)
    stack: list[tuple[TreeNode, list[dict[str, object]] | None]] = [(tree, root_children)]
    while stack:
        node, children = stack.pop()
        if not isinstance(node, FolderNode) or children is None:
            continue
        for child in node.children:
            child_payload, grandchildren = _node_payload(child)
            children.append(child_payload)
            stack.append((child, grandchildren))
    return root


class BlueprintMessageHandler:
    """Host side of the designer channel.

    ``ready`` is answered with an ``init`` message carrying the known-good
    tree. ``exportMarkdown`` validates the tree sent back by the UI, falls back
    to the known-good tree when validation fails, and writes the rendering
    into ``target_dir``.
    """

    def __init__(self, tree: TreeNode, target_dir: Path, style: ExportStyle | str = ExportStyle.TREE) -> None:
        self.tree = tree
        self.target_dir = target_dir
        self.style = style

    def handle(self, message: object) -> dict[str, object] | Path | None:
        """Dispatch one incoming message; unknown messages return ``None``."""
        if not isinstance(message, Mapping):
            return None
        kind = message.get("type")
        if kind == MESSAGE_READY:
            logger.debug("designer ready, sending init")
            return {"type": MESSAGE_INIT, "tree": tree_to_payload(self.tree)}
        if kind == MESSAGE_EXPORT:
            return self.export(message.get("tree"))
        return None

    def export(self, payload: object) -> Path:
        provided = parse_tree_payload(payload)
        if provided is None:
            logger.warning("rejected exported tree payload, using last known-good tree")
        else:
            self.tree = provided
        return write_export(self.target_dir, render(self.tree, self.style))


__all__ = [
    "MESSAGE_READY",
    "MESSAGE_INIT",
    "MESSAGE_EXPORT",
    "parse_tree_payload",
    "parse_tree_json",
    "tree_to_payload",
    "BlueprintMessageHandler",
]
