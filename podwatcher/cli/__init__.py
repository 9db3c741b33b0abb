"""podwatcher command-line interface.

Exposes:
    cli -- Click command entry point (registered as ``podwatcher`` script).
"""

from podwatcher.cli.main import cli

__all__ = ["cli"]
