"""Export pipeline: canonical ordering, text rendering, and file output."""

from __future__ import annotations

from .serialize import ExportStyle, normalize, render, render_bullets, render_tree, sort_key
from .writer import (
    EXPORT_BASENAME,
    EXPORT_SUFFIX,
    MAX_EXPORT_CANDIDATES,
    ExportNameExhaustedError,
    export_candidate_names,
    write_export,
)

__all__ = [
    "ExportStyle",
    "normalize",
    "render",
    "render_bullets",
    "render_tree",
    "sort_key",
    "EXPORT_BASENAME",
    "EXPORT_SUFFIX",
    "MAX_EXPORT_CANDIDATES",
    "ExportNameExhaustedError",
    "export_candidate_names",
    "write_export",
]
