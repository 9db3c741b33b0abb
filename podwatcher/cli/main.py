"""Click command: parse options, build config, run the watch loop."""

from __future__ import annotations

import asyncio

import click

from podwatcher import __version__
from podwatcher.app import main
from podwatcher.config import load_config
from podwatcher.errors import ConfigurationError

_HELP = """Watch Kubernetes pods and print changes that contain a marker string.

Monitors all pods across all namespaces. Every change to a pod whose YAML
contains MARKER is written to stdout as a separate YAML document. Logs go
to stderr.

\b
Examples:
  podwatcher --marker "DEBUG_MODE"
  podwatcher --marker "DEBUG_MODE" --stop-on-delete
"""


@click.command(name="podwatcher", help=_HELP)
@click.option(
    "--marker",
    "-m",
    required=True,
    envvar="PODWATCHER_MARKER",
    help="Marker substring to filter pods (required).",
)
@click.option(
    "--stop-on-delete",
    "-s",
    is_flag=True,
    default=False,
    envvar="PODWATCHER_STOP_ON_DELETE",
    help="Follow only the first matching pod and exit once it is deleted.",
)
@click.option(
    "--kubeconfig",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to kubeconfig file (defaults to the standard location, then in-cluster config).",
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Diagnostic log level (default: info).",
)
@click.version_option(__version__, prog_name="podwatcher")
def cli(marker: str, stop_on_delete: bool, kubeconfig: str | None, log_level: str | None) -> None:
    try:
        config = load_config(
            marker=marker,
            stop_on_delete=stop_on_delete,
            kubeconfig=kubeconfig,
            log_level=log_level,
        )
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc

    asyncio.run(main(config))
