"""Entry point for `python -m podwatcher`.

Usage:
    python -m podwatcher --marker DEBUG_MODE
    uv run python -m podwatcher --marker DEBUG_MODE --stop-on-delete
"""

from __future__ import annotations

from podwatcher.cli import cli

cli()
