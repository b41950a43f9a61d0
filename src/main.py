"""Run script.

Why it exists:
- Lets the CLI run with `python -m main` from `src/` during development.
- Keeps a simple entry point alongside the installed `czds` script.
"""

from __future__ import annotations

import sys

# Windows terminals default to cp1252; Rich output needs utf-8.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
