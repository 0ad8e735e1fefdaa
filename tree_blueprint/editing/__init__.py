"""Tree editing: pure mutation commands, undo history, and edit sessions."""

from __future__ import annotations

from .history import MAX_UNDO_HISTORY, HistoryCheckpoint, Snapshot, UndoHistory
from .mutations import (
    NEW_FILE_NAME,
    NEW_FOLDER_NAME,
    EditResult,
    create_child,
    create_child_file,
    create_child_folder,
    create_sibling,
    create_sibling_file,
    create_sibling_folder,
    delete_node,
    rename,
)
from .session import EditSession, PendingCreate

__all__ = [
    "MAX_UNDO_HISTORY",
    "HistoryCheckpoint",
    "Snapshot",
    "UndoHistory",
    "NEW_FILE_NAME",
    "NEW_FOLDER_NAME",
    "EditResult",
    "create_child",
    "create_child_file",
    "create_child_folder",
    "create_sibling",
    "create_sibling_file",
    "create_sibling_folder",
    "delete_node",
    "rename",
    "EditSession",
    "PendingCreate",
]
