"""Bounded undo/redo stacks of ``(tree, selected_id)`` snapshots.

Snapshots hold immutable tree values, so storing one is already a full copy:
later edits build new trees and never alter a stored snapshot.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..tree_model import TreeNode

MAX_UNDO_HISTORY = 100


@dataclass(frozen=True)
class Snapshot:
    """One history entry: a tree value and the selection that went with it."""

    tree: TreeNode
    selected_id: str | None


@dataclass(frozen=True)
class HistoryCheckpoint:
    """Exact copy of both stacks, used to roll back an abandoned create."""

    undo: tuple[Snapshot, ...]
    redo: tuple[Snapshot, ...]


class UndoHistory:
    """Linear undo history with FIFO eviction beyond ``max_entries``."""

    def __init__(self, max_entries: int = MAX_UNDO_HISTORY) -> None:
        self.max_entries = max(1, max_entries)
        self.undo_stack: list[Snapshot] = []
        self.redo_stack: list[Snapshot] = []

    @property
    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    @property
    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def _push_bounded(self, snapshot: Snapshot) -> None:
        self.undo_stack.append(snapshot)
        overflow = len(self.undo_stack) - self.max_entries
        if overflow > 0:
            del self.undo_stack[:overflow]

    def record(self, snapshot: Snapshot) -> None:
        """Push the pre-edit state and drop the redo branch."""
        self._push_bounded(snapshot)
        self.redo_stack.clear()

    def step_back(self, current: Snapshot) -> Snapshot | None:
        """Pop the previous state, moving ``current`` onto the redo stack."""
        if not self.undo_stack:
            return None
        target = self.undo_stack.pop()
        self.redo_stack.append(current)
        return target

    def step_forward(self, current: Snapshot) -> Snapshot | None:
        """Pop the next redo state, moving ``current`` onto the undo stack."""
        if not self.redo_stack:
            return None
        target = self.redo_stack.pop()
        self._push_bounded(current)
        return target

    def checkpoint(self) -> HistoryCheckpoint:
        return HistoryCheckpoint(undo=tuple(self.undo_stack), redo=tuple(self.redo_stack))

    def restore(self, checkpoint: HistoryCheckpoint) -> None:
        """Reset both stacks to exactly what ``checkpoint`` captured."""
        self.undo_stack = list(checkpoint.undo)
        self.redo_stack = list(checkpoint.redo)

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()


__all__ = [
    "MAX_UNDO_HISTORY",
    "Snapshot",
    "HistoryCheckpoint",
    "UndoHistory",
]
