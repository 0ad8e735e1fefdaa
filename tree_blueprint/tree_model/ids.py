"""Monotonic node-id source shared by scanning and editing in one session."""

from __future__ import annotations

import time
from collections.abc import Iterable

_BASE36_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Format a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError("value must be >= 0")
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_DIGITS[remainder])
    return "".join(reversed(digits))


class NodeIdFactory:
    """Hand out ``<prefix>-<counter>`` ids that are never repeated.

    The prefix defaults to the creation time in base 36 so ids from separate
    factories rarely collide. Ids already present in a tree can be reserved so
    the factory skips them.
    """

    def __init__(self, prefix: str | None = None) -> None:
        self.prefix = prefix if prefix is not None else to_base36(time.time_ns() // 1_000_000)
        self._counter = 0
        self._reserved: set[str] = set()

    def reserve(self, ids: Iterable[str]) -> None:
        """Mark ``ids`` as taken."""
        self._reserved.update(ids)

    def __call__(self) -> str:
        while True:
            candidate = f"{self.prefix}-{to_base36(self._counter)}"
            self._counter += 1
            if candidate not in self._reserved:
                self._reserved.add(candidate)
                return candidate


__all__ = ["NodeIdFactory", "to_base36"]
