"""Filesystem scanning into blueprint trees.

One folder node per directory and one file node per regular file at every
depth, skipping well-known VCS/build/dependency names. Children come back in
export order so a fresh scan already reads canonically.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .export.serialize import sort_key
from .tree_model import FileNode, FolderNode, NodeIdFactory, TreeNode

logger = logging.getLogger(__name__)

DEFAULT_ROOT_NAME = "Blueprint"

DEFAULT_EXCLUDES: frozenset[str] = frozenset(
    {
        # VCS
        ".git",
        ".svn",
        ".hg",
        # JS/TS ecosystem
        "node_modules",
        "bower_components",
        ".npm",
        ".pnpm-store",
        ".yarn",
        ".pnp",
        ".parcel-cache",
        ".turbo",
        ".nx",
        ".next",
        ".nuxt",
        ".svelte-kit",
        ".astro",
        ".vite",
        ".cache",
        ".vercel",
        ".netlify",
        # build artifacts
        "dist",
        "build",
        "out",
        "target",
        "coverage",
        ".nyc_output",
        # Python
        "__pycache__",
        ".pytest_cache",
        ".mypy_cache",
        ".ruff_cache",
        ".venv",
        "venv",
        "env",
        # Java/Kotlin/Gradle
        ".gradle",
        # .NET
        "bin",
        "obj",
        ".vs",
        # IDE
        ".idea",
    }
)


class ScanError(OSError):
    """Raised when the scan root itself cannot be listed."""


def _list_entries(directory: Path, excludes: frozenset[str]) -> tuple[list[tuple[str, Path, bool]], OSError | None]:
    """List ``(name, path, is_dir)`` for the plain directories and files in ``directory``."""
    entries: list[tuple[str, Path, bool]] = []
    try:
        with os.scandir(directory) as it:
            for child in it:
                if child.name in excludes:
                    continue
                try:
                    is_dir = child.is_dir(follow_symlinks=False)
                    is_file = child.is_file(follow_symlinks=False)
                except OSError:
                    continue
                if is_dir or is_file:
                    entries.append((child.name, Path(child.path), is_dir))
    except (PermissionError, OSError) as exc:
        return [], exc
    return entries, None


@dataclass
class _DirectoryFrame:
    name: str
    entries: list[tuple[str, Path, bool]]
    children: list[TreeNode] = field(default_factory=list)
    next_index: int = 0


def scan_directory(
    root: Path,
    excludes: Iterable[str] = DEFAULT_EXCLUDES,
    make_id: Callable[[], str] | None = None,
    name: str | None = None,
) -> FolderNode:
    """Build a blueprint tree for ``root``.

    ``make_id`` defaults to a fresh ``NodeIdFactory``; pass the session's
    factory to keep ids unique across scanning and editing.
    """
    excluded = frozenset(excludes)
    id_source = make_id if make_id is not None else NodeIdFactory()
    root_name = name or root.name or DEFAULT_ROOT_NAME

    entries, scan_error = _list_entries(root, excluded)
    if scan_error is not None:
        raise ScanError(f"cannot scan {root}: {scan_error}") from scan_error

    # Explicit stack: directory depth is bounded by the filesystem, not the interpreter.
    stack = [_DirectoryFrame(root_name, entries)]
    while True:
        frame = stack[-1]
        if frame.next_index >= len(frame.entries):
            stack.pop()
            frame.children.sort(key=sort_key)
            folder = FolderNode(id=id_source(), name=frame.name, children=tuple(frame.children))
            if not stack:
                logger.info("scanned %s (%d top-level entries)", root, len(folder.children))
                return folder
            stack[-1].children.append(folder)
            continue

        entry_name, path, is_dir = frame.entries[frame.next_index]
        frame.next_index += 1
        if not is_dir:
            frame.children.append(FileNode(id=id_source(), name=entry_name))
            continue
        sub_entries, scan_error = _list_entries(path, excluded)
        if scan_error is not None:
            logger.warning("skipping contents of %s: %s", path, scan_error)
        stack.append(_DirectoryFrame(entry_name, sub_entries))


__all__ = [
    "DEFAULT_EXCLUDES",
    "DEFAULT_ROOT_NAME",
    "ScanError",
    "scan_directory",
]
