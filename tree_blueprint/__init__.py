"""Public package surface for tree-blueprint.

Exports ``main`` for programmatic CLI invocation.
The editing engine lives in ``tree_blueprint.editing``; rendering in
``tree_blueprint.export``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
