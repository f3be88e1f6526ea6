"""Punto de entrada de ``python -m recap_tool``."""

from __future__ import annotations

from recap_tool.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
