"""Watch supervisor: the list/watch/restart control loop.

States::

    LISTING ──ok──▶ WATCHING ──stream ended / ERROR / watch failed──▶ RESTARTING
       ▲  │                 │                                          │
       └──┘ fetch failed    └──cancelled / target deleted──▶ TERMINATED │
       ▲                                                               │
       └───────────────────────────────────────────────────────────────┘

Every blocking point (list, open, receive, delay) is raced against the
cancellation gate. A restart may re-deliver pods that were already emitted;
they are not deduplicated.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol

import structlog

from podwatcher.collector.stream import ChangeStream
from podwatcher.errors import (
    CancellationRequested,
    SerializationError,
    TransientFetchError,
    TransientWatchError,
    UnexpectedPayloadError,
)
from podwatcher.filter import contains_marker, serialize_entity
from podwatcher.gate import CancellationGate
from podwatcher.lock import Decision, TargetLock
from podwatcher.models.config import WatchConfig
from podwatcher.models.events import EntityChange, StreamError
from podwatcher.output import DocumentWriter

_log = structlog.get_logger(component="supervisor")


class SupervisorState(StrEnum):
    LISTING = "listing"
    WATCHING = "watching"
    RESTARTING = "restarting"
    TERMINATED = "terminated"


class Snapshots(Protocol):
    async def snapshot(self) -> str: ...


class Streams(Protocol):
    async def open(self, resource_version: str) -> ChangeStream: ...


class WatchSupervisor:
    """Drives snapshot → watch → filter → lock → emit until terminated."""

    def __init__(
        self,
        snapshots: Snapshots,
        streams: Streams,
        writer: DocumentWriter,
        gate: CancellationGate,
        config: WatchConfig,
    ) -> None:
        self._snapshots = snapshots
        self._streams = streams
        self._writer = writer
        self._gate = gate
        self._config = config
        self._lock = TargetLock() if config.stop_on_delete else None

        self.state = SupervisorState.LISTING
        self._resource_version: str | None = None
        self.restarts = 0
        self.emitted = 0

    @property
    def lock(self) -> TargetLock | None:
        return self._lock

    async def run(self) -> None:
        """Run until cancelled or, in stop-on-delete mode, the target is deleted."""
        _log.info(
            "pod_watcher_starting",
            marker=self._config.marker,
            stop_on_delete=self._config.stop_on_delete,
        )
        while self.state != SupervisorState.TERMINATED:
            try:
                if self.state == SupervisorState.LISTING:
                    await self._list()
                elif self.state == SupervisorState.WATCHING:
                    await self._watch()
                elif self.state == SupervisorState.RESTARTING:
                    await self._restart()
            except CancellationRequested:
                _log.info("cancellation_requested", state=str(self.state))
                self.state = SupervisorState.TERMINATED

        _log.info("pod_watcher_stopped", emitted=self.emitted, restarts=self.restarts)

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    async def _list(self) -> None:
        try:
            self._resource_version = await self._gate.race(self._snapshots.snapshot())
        except TransientFetchError as exc:
            _log.info("pod_list_failed", error=str(exc), retry_in=self._config.list_retry_delay)
            await self._pause(self._config.list_retry_delay)
            return
        self.state = SupervisorState.WATCHING

    async def _watch(self) -> None:
        assert self._resource_version is not None
        try:
            stream = await self._gate.race(self._streams.open(self._resource_version))
        except TransientWatchError as exc:
            _log.info(
                "watch_start_failed",
                resource_version=self._resource_version,
                error=str(exc),
                retry_in=self._config.list_retry_delay,
            )
            await self._pause(self._config.list_retry_delay)
            self.state = SupervisorState.LISTING
            return

        async with stream:
            self.state = await self._consume(stream)

    async def _restart(self) -> None:
        self.restarts += 1
        _log.info("watch_restarting", restarts=self.restarts, delay=self._config.restart_delay)
        await self._pause(self._config.restart_delay)
        self.state = SupervisorState.LISTING

    # ------------------------------------------------------------------
    # Notification handling
    # ------------------------------------------------------------------

    async def _consume(self, stream: ChangeStream) -> SupervisorState:
        """Process notifications in arrival order; return the next state."""
        while True:
            try:
                notification = await self._gate.race(stream.receive())
            except UnexpectedPayloadError as exc:
                _log.debug("unexpected_payload_skipped", error=str(exc))
                continue
            except TransientWatchError as exc:
                _log.info("watch_stream_failed", error=str(exc))
                return SupervisorState.RESTARTING

            if self._gate.cancelled:
                raise CancellationRequested

            if notification is None:
                _log.info("watch_stream_ended", resource_version=stream.resource_version)
                return SupervisorState.RESTARTING

            if isinstance(notification, StreamError):
                _log.info(
                    "watch_error",
                    message=notification.message,
                    code=notification.code,
                    reason=notification.reason,
                )
                return SupervisorState.RESTARTING

            if self._handle(notification):
                return SupervisorState.TERMINATED

    def _handle(self, change: EntityChange) -> bool:
        """Filter, lock and emit one change. Returns True when the watch must end."""
        entity = change.entity
        try:
            serialized = serialize_entity(entity)
        except SerializationError as exc:
            _log.warning("pod_serialization_failed", pod=entity.identity, error=str(exc.cause))
            return False

        if not contains_marker(serialized, self._config.marker):
            return False

        decision = Decision.EMIT
        if self._lock is not None:
            decision = self._lock.consider(entity.identity, change.kind)
            if not decision:
                return False

        self._writer.write(serialized)
        self.emitted += 1

        if Decision.TERMINATE_AFTER_EMIT in decision:
            _log.info("target_deleted", pod=entity.identity)
            return True
        return False

    async def _pause(self, delay: float) -> None:
        if await self._gate.sleep(delay):
            raise CancellationRequested
