"""Persistent JSON config helpers.

Stores the preferred export style, extra scan excludes, and undo depth.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from .editing.history import MAX_UNDO_HISTORY
from .export.serialize import ExportStyle

logger = logging.getLogger(__name__)

APP_NAME = "tree-blueprint"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Write failures are logged and otherwise ignored; a read-only config
    directory must not break exporting.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception as exc:
        logger.warning("could not save config to %s: %s", CONFIG_PATH, exc)


def load_export_style() -> ExportStyle:
    """Return persisted export style, defaulting to connector trees."""
    value = load_config().get("export_style")
    if not isinstance(value, str):
        return ExportStyle.TREE
    try:
        return ExportStyle(value.strip().lower())
    except ValueError:
        return ExportStyle.TREE


def save_export_style(style: ExportStyle | str) -> None:
    config = load_config()
    config["export_style"] = ExportStyle(style).value
    save_config(config)


def load_extra_excludes() -> frozenset[str]:
    """Load additional directory/file names to skip while scanning.

    Non-string and blank entries are dropped.
    """
    value = load_config().get("extra_excludes")
    if not isinstance(value, list):
        return frozenset()
    return frozenset(item.strip() for item in value if isinstance(item, str) and item.strip())


def load_history_limit() -> int:
    """Return the undo depth; booleans and non-positive values are ignored."""
    value = load_config().get("history_limit")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return MAX_UNDO_HISTORY
    return value


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "load_config",
    "save_config",
    "load_export_style",
    "save_export_style",
    "load_extra_excludes",
    "load_history_limit",
]
