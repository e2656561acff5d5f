"""
Allow running the CLI with ``python -m commitver``.

This is equivalent to running the ``commitver`` console script installed
via ``pyproject.toml``.
"""

from commitver.cli import main


if __name__ == "__main__":
    main(prog_name="commitver")
