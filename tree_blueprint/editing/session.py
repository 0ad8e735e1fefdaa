"""Edit session: current tree, selection, inline-edit focus, and history.

``EditSession`` is the single owner of which tree value is current. It wraps
the pure commands in ``mutations`` with snapshot-based undo/redo and the
pending-create protocol: a node created and then committed with an empty name
is un-created, restoring the tree, selection, and both history stacks to their
exact pre-create values.

Commands return ``True`` when they changed session state. Commands that do
not apply in the current state (undo while editing, deleting the root, stale
ids) are no-ops returning ``False``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..export.serialize import ExportStyle, render
from ..tree_model import FILE, FOLDER, NodeIdFactory, TreeNode, find_node, tree_ids
from . import mutations
from .history import MAX_UNDO_HISTORY, HistoryCheckpoint, Snapshot, UndoHistory
from .mutations import EditResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingCreate:
    """Bookkeeping that lets a just-created, unnamed node be fully un-created."""

    node_id: str
    history: HistoryCheckpoint
    before: Snapshot

    @property
    def undo_depth(self) -> int:
        """Undo-stack depth just before the create was recorded."""
        return len(self.history.undo)


class EditSession:
    """One editing session over a blueprint tree."""

    def __init__(
        self,
        tree: TreeNode,
        make_id: Callable[[], str] | None = None,
        history_limit: int = MAX_UNDO_HISTORY,
    ) -> None:
        self._make_id = make_id if make_id is not None else NodeIdFactory()
        self.history = UndoHistory(history_limit)
        self.tree: TreeNode = tree
        self.selected_id: str | None = tree.id
        self.editing_id: str | None = None
        self.pending_create: PendingCreate | None = None
        self._reserve_ids(tree)

    # ------------------------------------------------------------------
    # state

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def can_undo(self) -> bool:
        return not self.is_editing and self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return not self.is_editing and self.history.can_redo

    def snapshot(self) -> Snapshot:
        return Snapshot(tree=self.tree, selected_id=self.selected_id)

    def _apply_snapshot(self, snapshot: Snapshot) -> None:
        self.tree = snapshot.tree
        self.selected_id = snapshot.selected_id

    def _reserve_ids(self, tree: TreeNode) -> None:
        reserve = getattr(self._make_id, "reserve", None)
        if reserve is not None:
            reserve(tree_ids(tree))

    def load_tree(self, tree: TreeNode) -> None:
        """Replace the whole session state with a freshly provided tree."""
        self._reserve_ids(tree)
        self.tree = tree
        self.selected_id = tree.id
        self.editing_id = None
        self.pending_create = None
        self.history.clear()

    # ------------------------------------------------------------------
    # selection / edit focus

    def select(self, node_id: str) -> bool:
        """Move selection to a live node; ignored while an edit is open."""
        if self.is_editing or find_node(self.tree, node_id) is None:
            return False
        self.selected_id = node_id
        return True

    def begin_rename(self) -> bool:
        """Open inline rename on the selection. The root is not renameable."""
        if self.is_editing or self.selected_id is None or self.selected_id == self.tree.id:
            return False
        if find_node(self.tree, self.selected_id) is None:
            return False
        self.editing_id = self.selected_id
        return True

    # ------------------------------------------------------------------
    # creation

    def _create(self, command: Callable[..., EditResult], kind: str) -> bool:
        if self.is_editing:
            return False
        before = self.snapshot()
        checkpoint = self.history.checkpoint()
        result = command(self.tree, self.selected_id, kind, self._make_id)
        if not result.changed:
            logger.debug("create %s skipped: %s", kind, result.reason)
            return False

        self.history.record(before)
        self.tree = result.tree
        self.selected_id = result.selected_id
        self.editing_id = result.editing_id
        self.pending_create = PendingCreate(
            node_id=result.editing_id or "",
            history=checkpoint,
            before=before,
        )
        logger.debug("created %s %s", kind, result.editing_id)
        return True

    def create_child_folder(self) -> bool:
        return self._create(mutations.create_child, FOLDER)

    def create_child_file(self) -> bool:
        return self._create(mutations.create_child, FILE)

    def create_sibling_folder(self) -> bool:
        return self._create(mutations.create_sibling, FOLDER)

    def create_sibling_file(self) -> bool:
        return self._create(mutations.create_sibling, FILE)

    # ------------------------------------------------------------------
    # rename commit / cancel

    def _rollback_pending_create(self) -> None:
        pending = self.pending_create
        assert pending is not None
        self._apply_snapshot(pending.before)
        self.history.restore(pending.history)
        self.pending_create = None
        self.editing_id = None
        logger.debug("cancelled creation of %s, undo depth back to %d", pending.node_id, pending.undo_depth)

    def commit_rename(self, value: str, node_id: str | None = None) -> bool:
        """Commit inline-edit text for ``node_id`` (defaults to the edit target).

        Empty text un-creates a pending node or else discards the edit. A
        changed non-empty name is recorded in history before it is applied.
        """
        target_id = self.editing_id if node_id is None else node_id
        if target_id is None:
            return False
        pending_matches = self.pending_create is not None and self.pending_create.node_id == target_id
        if self.pending_create is not None and not pending_matches:
            # A commit aimed at another node ends the pending create.
            logger.debug("dropping pending create of %s", self.pending_create.node_id)
            self.pending_create = None

        if find_node(self.tree, target_id) is None:
            self.editing_id = None
            if pending_matches:
                self.pending_create = None
            return False

        trimmed = (value or "").strip()
        if not trimmed:
            if pending_matches:
                self._rollback_pending_create()
                return True
            self.editing_id = None
            return False

        result = mutations.rename(self.tree, target_id, trimmed, selected_id=self.selected_id)
        if result.changed:
            self.history.record(self.snapshot())
            self.tree = result.tree
        if pending_matches:
            self.pending_create = None
        self.editing_id = None
        return result.changed

    def cancel_edit(self) -> bool:
        """Escape: same as committing an empty name for the edit target."""
        if self.editing_id is None:
            return False
        return self.commit_rename("", self.editing_id)

    # ------------------------------------------------------------------
    # deletion

    def delete(self, node_id: str) -> bool:
        """Delete ``node_id``; blocked while editing and never applies to root."""
        if self.is_editing:
            return False
        result = mutations.delete_node(self.tree, node_id, selected_id=self.selected_id)
        if not result.changed:
            logger.debug("delete %s skipped: %s", node_id, result.reason)
            return False
        self.history.record(self.snapshot())
        self.tree = result.tree
        self.selected_id = result.selected_id
        return True

    def delete_selected(self) -> bool:
        if self.selected_id is None:
            return False
        return self.delete(self.selected_id)

    # ------------------------------------------------------------------
    # history

    def undo(self) -> bool:
        if self.is_editing:
            return False
        target = self.history.step_back(self.snapshot())
        if target is None:
            return False
        self._apply_snapshot(target)
        self.editing_id = None
        return True

    def redo(self) -> bool:
        if self.is_editing:
            return False
        target = self.history.step_forward(self.snapshot())
        if target is None:
            return False
        self._apply_snapshot(target)
        self.editing_id = None
        return True

    # ------------------------------------------------------------------
    # export

    def export_text(self, style: ExportStyle | str = ExportStyle.TREE) -> str:
        """Render the current tree in canonical export form."""
        return render(self.tree, style)


__all__ = ["EditSession", "PendingCreate"]
