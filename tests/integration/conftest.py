"""Scripted fakes for driving the WatchSupervisor end to end.

FakeSnapshots and FakeStreams stand in for the Kubernetes-backed snapshot
provider and stream source; each opened FakeStream replays a script of
notifications (or exceptions) and then either ends or blocks forever.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from podwatcher.gate import CancellationGate
from podwatcher.models.config import WatchConfig
from podwatcher.output import DocumentWriter
from podwatcher.supervisor import WatchSupervisor

_BLOCK = object()


class FakeStream:
    def __init__(self, items: list[Any], resource_version: str) -> None:
        self._items = list(items)
        self.resource_version = resource_version
        self.closed = False
        self.received = 0

    async def receive(self) -> Any:
        if not self._items:
            return None
        item = self._items.pop(0)
        if item is _BLOCK:
            await asyncio.Event().wait()
        self.received += 1
        if isinstance(item, BaseException):
            raise item
        return item

    async def close(self) -> None:
        self.closed = True

    async def __aenter__(self) -> FakeStream:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


class FakeStreams:
    """Hands out one scripted stream per open(); cancels the gate when out of scripts."""

    def __init__(self, gate: CancellationGate, scripts: list[list[Any] | BaseException]) -> None:
        self._gate = gate
        self._scripts = list(scripts)
        self.opened: list[FakeStream] = []
        self.tokens: list[str] = []

    async def open(self, resource_version: str) -> FakeStream:
        self.tokens.append(resource_version)
        if not self._scripts:
            self._gate.cancel()
            stream = FakeStream([_BLOCK], resource_version)
        else:
            script = self._scripts.pop(0)
            if isinstance(script, BaseException):
                raise script
            stream = FakeStream(script, resource_version)
        self.opened.append(stream)
        return stream


class FakeSnapshots:
    """Returns increasing resourceVersions; scripted exceptions are raised first."""

    def __init__(self, failures: list[BaseException] | None = None) -> None:
        self._failures = list(failures or [])
        self.calls = 0

    async def snapshot(self) -> str:
        self.calls += 1
        if self._failures:
            raise self._failures.pop(0)
        return str(1000 * self.calls)


def block() -> object:
    """Script item that blocks the stream until the task is cancelled."""
    return _BLOCK


@pytest.fixture
def build_supervisor(gate: CancellationGate, writer: DocumentWriter):
    """Factory: build_supervisor(scripts, stop_on_delete=..., snapshot_failures=...)."""

    def _build(
        scripts: list[list[Any] | BaseException],
        *,
        marker: str = "DEBUG_MODE",
        stop_on_delete: bool = False,
        snapshot_failures: list[BaseException] | None = None,
    ) -> tuple[WatchSupervisor, FakeSnapshots, FakeStreams]:
        snapshots = FakeSnapshots(snapshot_failures)
        streams = FakeStreams(gate, scripts)
        config = WatchConfig(
            marker=marker,
            stop_on_delete=stop_on_delete,
            list_retry_delay=0.01,
            restart_delay=0.01,
        )
        supervisor = WatchSupervisor(snapshots, streams, writer, gate, config)  # type: ignore[arg-type]
        return supervisor, snapshots, streams

    return _build
