"""Module entrypoint for ``python -m tree_blueprint``.

This keeps module-mode execution behavior identical to the CLI script.
All argument parsing happens in ``tree_blueprint.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
