"""Keyboard bindings for tree-mode editing.

Key tokens are matched case-insensitively and ignore spaces around ``+``
(``"Ctrl + Z"`` == ``"ctrl+z"``). Inline-edit keys (Enter/Escape inside the
name box) are not routed here; the host calls ``EditSession.commit_rename`` /
``cancel_edit`` for those.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .editing import EditSession


def normalize_key_token(key: str) -> str:
    """Lowercase a key token and drop spaces around ``+`` separators."""
    return "+".join(part.strip() for part in key.strip().lower().split("+"))


@dataclass(frozen=True)
class KeyBinding:
    """One designer shortcut: every key token that triggers ``action``.

    ``action`` returns ``True`` when it changed the session and ``False``
    when it did not apply (for example, undo with an empty history).
    """

    keys: tuple[str, ...]
    action: Callable[[], bool]


class SessionKeymap:
    """Key-token dispatch table for one editing session.

    Tokens are normalized on registration and on lookup. Binding a token
    again replaces its earlier action.
    """

    def __init__(self, bindings: Iterable[KeyBinding] = ()) -> None:
        self._actions: dict[str, Callable[[], bool]] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> SessionKeymap:
        """Add ``binding`` and return ``self`` so calls can be chained."""
        for key in binding.keys:
            self._actions[normalize_key_token(key)] = binding.action
        return self

    def bound_keys(self) -> tuple[str, ...]:
        """Normalized tokens with an action, sorted for stable listings."""
        return tuple(sorted(self._actions))

    def dispatch(self, key: str) -> bool | None:
        """Run the action bound to ``key``; ``None`` means the key is unbound."""
        action = self._actions.get(normalize_key_token(key))
        if action is None:
            return None
        return action()


def build_session_keymap(
    session: EditSession,
    on_export: Callable[[], object] | None = None,
) -> SessionKeymap:
    """Build the designer keymap bound to ``session``."""

    def create_child_file() -> bool:
        # Tab on the root does nothing; new root entries come from Enter.
        if session.selected_id == session.tree.id:
            return False
        return session.create_child_file()

    def export() -> bool:
        if on_export is None:
            return False
        on_export()
        return True

    return SessionKeymap(
        (
            KeyBinding(("Enter",), session.create_sibling_folder),
            KeyBinding(("Tab",), create_child_file),
            KeyBinding(("F2",), session.begin_rename),
            KeyBinding(("Delete", "Backspace"), session.delete_selected),
            KeyBinding(("Ctrl+Z", "Cmd+Z"), session.undo),
            KeyBinding(("Ctrl+Y", "Cmd+Y"), session.redo),
            KeyBinding(("Ctrl+S", "Cmd+S"), export),
        )
    )


__all__ = [
    "KeyBinding",
    "SessionKeymap",
    "normalize_key_token",
    "build_session_keymap",
]
