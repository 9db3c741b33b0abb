"""Change stream source: a pod watch decoded into tagged notifications.

Raw watch events are turned into ``EntityChange`` / ``StreamError`` exactly
once, in ``decode_event``; nothing downstream inspects raw payloads.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import aiohttp
import structlog
from kubernetes_asyncio import client, watch

from podwatcher.errors import TransientWatchError, UnexpectedPayloadError
from podwatcher.models.events import ChangeKind, ChangeNotification, EntityChange, PodEntity, StreamError

_log = structlog.get_logger(component="collector.stream")

_ENTITY_KINDS = {ChangeKind.ADDED, ChangeKind.MODIFIED, ChangeKind.DELETED}


def decode_event(event: dict[str, Any]) -> ChangeNotification | None:
    """Decode one raw watch event.

    Returns None for BOOKMARK events, which carry no change. Raises
    UnexpectedPayloadError when the event is neither a pod change nor an
    error Status.
    """
    event_type = str(event.get("type", "")).upper()
    raw = event.get("raw_object", event.get("object"))

    if event_type == "BOOKMARK":
        return None

    if event_type == ChangeKind.ERROR:
        if not isinstance(raw, dict):
            return StreamError(message="received unknown error object")
        return StreamError(
            message=str(raw.get("message", "")),
            code=int(raw.get("code") or 0),
            reason=str(raw.get("reason", "")),
        )

    if event_type not in _ENTITY_KINDS:
        raise UnexpectedPayloadError(f"unknown watch event type {event_type!r}")
    if not isinstance(raw, dict):
        raise UnexpectedPayloadError(f"{event_type} event without an object")
    kind = raw.get("kind", "Pod")
    if kind != "Pod":
        raise UnexpectedPayloadError(f"{event_type} event carries a {kind}, expected Pod")
    if not (raw.get("metadata") or {}).get("name"):
        raise UnexpectedPayloadError(f"{event_type} event carries a pod without a name")

    return EntityChange(kind=ChangeKind(event_type), entity=PodEntity.from_raw(raw))


class ChangeStream:
    """One open pod watch. Not restartable.

    Use as an async context manager so the subscription is released on every
    exit path, including cancellation.
    """

    def __init__(self, watcher: watch.Watch, events: Any, resource_version: str) -> None:
        self._watcher = watcher
        self._events = events
        self.resource_version = resource_version
        self._exhausted = False
        self._closed = False

    async def receive(self) -> ChangeNotification | None:
        """Wait for the next notification; None once the stream has ended.

        An ApiException raised by the client mid-stream (how it reports
        server ERROR events such as 410 Gone) is surfaced as a StreamError.
        Network failures raise TransientWatchError.
        """
        while not self._exhausted:
            try:
                event = await self._events.__anext__()
            except StopAsyncIteration:
                self._exhausted = True
                return None
            except client.ApiException as exc:
                self._exhausted = True
                return StreamError(message=str(exc.reason or ""), code=int(exc.status or 0))
            except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
                self._exhausted = True
                raise TransientWatchError(f"pod watch failed: {exc!r}") from exc

            notification = decode_event(event)
            if notification is None:
                continue
            if isinstance(notification, StreamError):
                self._exhausted = True
            return notification
        return None

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._watcher.stop()
        await self._watcher.close()
        _log.debug("pod_watch_closed", resource_version=self.resource_version)

    async def __aenter__(self) -> ChangeStream:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()


class ChangeStreamSource:
    """Opens pod watches for all namespaces anchored at a resourceVersion."""

    def __init__(
        self,
        core_v1: client.CoreV1Api,
        timeout_seconds: int | None = None,
        watch_factory: Callable[[], watch.Watch] = watch.Watch,
    ) -> None:
        self._v1 = core_v1
        self._timeout_seconds = timeout_seconds
        self._watch_factory = watch_factory

    async def open(self, resource_version: str) -> ChangeStream:
        """Subscribe to pod changes after *resource_version*.

        The watch request is sent here, so a subscription that cannot be
        established raises TransientWatchError instead of surfacing later.
        """
        # timeout_seconds must always be present, even as None: without the key
        # kubernetes-asyncio reconnects on EOF and retries 410 on its own.
        kwargs: dict[str, Any] = {
            "resource_version": resource_version,
            "timeout_seconds": self._timeout_seconds,
        }

        watcher = self._watch_factory()
        events = watcher.stream(self._v1.list_pod_for_all_namespaces, **kwargs)
        try:
            watcher.resp = await watcher.func()
        except client.ApiException as exc:
            await watcher.close()
            raise TransientWatchError(f"pod watch could not start: {exc.status} {exc.reason}") from exc
        except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
            await watcher.close()
            raise TransientWatchError(f"pod watch could not start: {exc!r}") from exc

        _log.debug("pod_watch_opened", resource_version=resource_version)
        return ChangeStream(watcher, events, resource_version)
