"""Wikiterm CLI entry point.

Allows running via `python -m wikiterm` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys


def main() -> None:
    from .browser import WikiBrowser
    try:
        WikiBrowser().run()
    except Exception as e:
        print(f"Error running program: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
