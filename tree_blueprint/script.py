"""Line-oriented edit scripts applied to an ``EditSession``.

Commands, one per line::

    select src/app        # path of display names below the root ("." = root)
    key Enter             # any key understood by the session keymap
    type main.py          # commit the open inline edit with this text
    type                  # commit an empty name
    escape                # cancel the open inline edit
    undo
    redo

Blank lines are ignored. A ``#`` at the start of a line or after whitespace
begins a comment, so a name such as ``C#`` is still read whole.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable

from .editing import EditSession
from .keys import build_session_keymap
from .tree_model import find_path_by_names


class ScriptError(ValueError):
    """Raised for unknown commands or unresolvable paths, with line number."""

    def __init__(self, line_number: int, message: str) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


_COMMENT_RE = re.compile(r"(?:^|\s)#.*$")


def _strip_comment(line: str) -> str:
    return _COMMENT_RE.sub("", line).strip()


def run_script(
    session: EditSession,
    lines: Iterable[str],
    on_export: Callable[[], object] | None = None,
) -> int:
    """Apply script ``lines`` to ``session`` and return the number of commands run."""
    keymap = build_session_keymap(session, on_export=on_export)
    executed = 0
    for line_number, raw_line in enumerate(lines, start=1):
        line = _strip_comment(raw_line)
        if not line:
            continue
        command, _sep, argument = line.partition(" ")
        command = command.lower()
        argument = argument.strip()

        if command == "select":
            path = find_path_by_names(session.tree, argument)
            if path is None:
                raise ScriptError(line_number, f"no such node: {argument!r}")
            if not session.select(path[-1].id):
                raise ScriptError(line_number, "cannot change selection while editing")
        elif command == "key":
            if not argument:
                raise ScriptError(line_number, "key command needs a key name")
            if keymap.dispatch(argument) is None:
                bound = ", ".join(keymap.bound_keys())
                raise ScriptError(line_number, f"unbound key: {argument!r} (bound: {bound})")
        elif command == "type":
            if not session.is_editing:
                raise ScriptError(line_number, "no inline edit is open")
            session.commit_rename(argument)
        elif command == "escape":
            session.cancel_edit()
        elif command == "undo":
            session.undo()
        elif command == "redo":
            session.redo()
        else:
            raise ScriptError(line_number, f"unknown command: {command!r}")
        executed += 1
    return executed


__all__ = ["ScriptError", "run_script"]
