"""Command-line front door for tree-blueprint.

Scans a folder, optionally replays an edit script against the in-memory
tree, and writes the blueprint next to the scanned folder (or prints it).
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .editing import EditSession
from .export import ExportNameExhaustedError, ExportStyle, write_export
from .scan import DEFAULT_EXCLUDES, ScanError, scan_directory
from .script import ScriptError, run_script
from .tree_model import NodeIdFactory


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _read_script(path_text: str) -> list[str]:
    if path_text == "-":
        return sys.stdin.read().splitlines()
    script_path = Path(path_text)
    try:
        return script_path.read_text(encoding="utf-8").splitlines()
    except OSError as exc:
        raise SystemExit(f"Cannot read script {script_path}: {exc}") from exc


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tree-blueprint",
        description="Scan a folder into an editable tree and export it as a blueprint.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Folder to scan. Defaults to current directory.")
    parser.add_argument(
        "--format",
        choices=[style.value for style in ExportStyle],
        default=None,
        help="Export style (default: configured style, else tree).",
    )
    parser.add_argument("--print", dest="print_only", action="store_true", help="Print the blueprint instead of writing it.")
    parser.add_argument("--script", metavar="FILE", help="Apply an edit script before exporting ('-' for stdin).")
    parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        metavar="NAME",
        help="Extra entry name to skip while scanning (repeatable).",
    )
    parser.add_argument("--no-default-excludes", action="store_true", help="Do not skip VCS/build/dependency folders.")
    parser.add_argument("--remember-format", action="store_true", help="Persist --format as the default style.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    return parser


def main(argv: list[str] | None = None, default_path: Path | None = None) -> None:
    """Parse CLI arguments, scan, edit, and export.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is scanned.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if default_path is None:
        default_path = Path.cwd()
    root = Path(args.path or default_path)
    if not root.exists():
        raise SystemExit(f"Path not found: {root}")
    if not root.is_dir():
        raise SystemExit(f"Not a directory: {root}")
    root = root.resolve()

    style = ExportStyle(args.format) if args.format is not None else config.load_export_style()
    if args.remember_format and args.format is not None:
        config.save_export_style(style)

    excludes = set() if args.no_default_excludes else set(DEFAULT_EXCLUDES)
    excludes.update(config.load_extra_excludes())
    excludes.update(args.exclude)

    make_id = NodeIdFactory()
    try:
        tree = scan_directory(root, excludes=excludes, make_id=make_id)
    except ScanError as exc:
        raise SystemExit(str(exc)) from exc

    session = EditSession(tree, make_id=make_id, history_limit=config.load_history_limit())
    if args.script is not None:
        try:
            run_script(session, _read_script(args.script))
        except ScriptError as exc:
            raise SystemExit(f"Script error: {exc}") from exc
        if session.is_editing:
            # An unfinished inline edit is treated like Escape.
            session.cancel_edit()

    text = session.export_text(style)
    if args.print_only:
        sys.stdout.write(text)
        return

    try:
        written = write_export(root, text)
    except (ExportNameExhaustedError, OSError) as exc:
        raise SystemExit(f"Export failed: {exc}") from exc
    sys.stdout.write(f"{written}\n")


if __name__ == "__main__":
    main()
