"""Write rendered blueprints next to the scanned folder without overwriting."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

EXPORT_BASENAME = "blueprint"
EXPORT_SUFFIX = ".md"
MAX_EXPORT_CANDIDATES = 1_000


class ExportNameExhaustedError(RuntimeError):
    """Raised when every candidate export filename is already taken."""


def export_candidate_names(max_candidates: int = MAX_EXPORT_CANDIDATES) -> Iterator[str]:
    """Yield ``blueprint.md``, ``blueprint-1.md``, ``blueprint-2.md``, ..."""
    for idx in range(max_candidates):
        if idx == 0:
            yield f"{EXPORT_BASENAME}{EXPORT_SUFFIX}"
        else:
            yield f"{EXPORT_BASENAME}-{idx}{EXPORT_SUFFIX}"


def write_export(directory: Path, text: str, max_candidates: int = MAX_EXPORT_CANDIDATES) -> Path:
    """Write ``text`` to the first free candidate name in ``directory``.

    Files are opened in exclusive-create mode, so an entry appearing between
    the existence check and the write moves on to the next candidate.
    """
    for name in export_candidate_names(max_candidates):
        candidate = directory / name
        if candidate.exists() or candidate.is_symlink():
            continue
        try:
            with candidate.open("x", encoding="utf-8", newline="") as handle:
                handle.write(text)
        except FileExistsError:
            continue
        logger.info("blueprint written to %s", candidate)
        return candidate
    raise ExportNameExhaustedError(
        f"no free export filename in {directory} after {max_candidates} attempts; "
        "check directory permissions or remove old blueprint files"
    )


__all__ = [
    "EXPORT_BASENAME",
    "EXPORT_SUFFIX",
    "MAX_EXPORT_CANDIDATES",
    "ExportNameExhaustedError",
    "export_candidate_names",
    "write_export",
]
