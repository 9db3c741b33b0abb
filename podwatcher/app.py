"""Application bootstrap for podwatcher.

Wires components in dependency order and manages the asyncio lifecycle.
Startup order: logging → K8s credentials → snapshot provider / stream source
              → supervisor

SIGINT and SIGTERM trip the cancellation gate; the supervisor notices at its
next blocking point, closes the open watch and returns. Shutdown then closes
the API client.
"""

from __future__ import annotations

import asyncio
import signal
from typing import TYPE_CHECKING

from kubernetes_asyncio import client

from podwatcher.collector.snapshot import SnapshotProvider
from podwatcher.collector.stream import ChangeStreamSource
from podwatcher.errors import ConfigurationError
from podwatcher.gate import CancellationGate
from podwatcher.kube import load_credentials
from podwatcher.models.config import PodWatcherConfig
from podwatcher.observability.logging import bind_watch_context, get_logger, setup_logging
from podwatcher.output import DocumentWriter
from podwatcher.supervisor import WatchSupervisor

if TYPE_CHECKING:
    import structlog


class PodWatcherApp:
    """Application root. Owns the API client and the supervisor.

    ``stop()`` is safe to call on an app that was never started or has
    already stopped.
    """

    def __init__(
        self,
        config: PodWatcherConfig,
        gate: CancellationGate | None = None,
        writer: DocumentWriter | None = None,
    ) -> None:
        self.config = config
        self.gate = gate or CancellationGate()
        self._writer = writer or DocumentWriter()
        self._api_client: client.ApiClient | None = None
        self.supervisor: WatchSupervisor | None = None
        self._log: structlog.stdlib.BoundLogger | None = None

    async def start(self) -> None:
        """Load credentials and build the supervisor.

        Raises ConfigurationError if no Kubernetes credentials can be loaded.
        """
        setup_logging(self.config.log.level)
        bind_watch_context(self.config.watch.marker, self.config.watch.stop_on_delete)
        self._log = get_logger("app")
        self._log.info("podwatcher starting", version=_podwatcher_version())

        self._api_client = await load_credentials(self.config.kube.kubeconfig)
        core_v1 = client.CoreV1Api(self._api_client)

        self.supervisor = WatchSupervisor(
            snapshots=SnapshotProvider(core_v1),
            streams=ChangeStreamSource(core_v1, timeout_seconds=self.config.watch.watch_timeout_seconds),
            writer=self._writer,
            gate=self.gate,
            config=self.config.watch,
        )

    async def run(self) -> None:
        assert self.supervisor is not None
        await self.supervisor.run()

    async def stop(self) -> None:
        """Close the kubernetes-asyncio ApiClient connection pool."""
        if self._api_client is None:
            return
        api_client, self._api_client = self._api_client, None
        log = self._log or get_logger("app")
        try:
            await api_client.close()
        except Exception as exc:
            log.debug("k8s client close raised (non-fatal)", error=str(exc))
        log.info("podwatcher stopped")


def _podwatcher_version() -> str:
    from podwatcher import __version__

    return __version__


# ---------------------------------------------------------------------------
# Async entrypoint
# ---------------------------------------------------------------------------


async def main(config: PodWatcherConfig) -> None:
    """Create the app, register OS signals, run until the watch terminates."""
    app = PodWatcherApp(config)
    loop = asyncio.get_running_loop()

    def _request_shutdown() -> None:
        if not app.gate.cancelled:
            get_logger("app").info("shutdown signal received")
        app.gate.cancel()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, _request_shutdown)

    try:
        await app.start()
        await app.run()
    except ConfigurationError as exc:
        log = get_logger("app")
        log.critical("fatal startup error", error=str(exc))
        raise SystemExit(1) from exc
    finally:
        await app.stop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            loop.remove_signal_handler(sig)
