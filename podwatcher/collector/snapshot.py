"""Snapshot provider: lists every pod to obtain a consistent resourceVersion."""

from __future__ import annotations

import asyncio

import aiohttp
import structlog
from kubernetes_asyncio import client

from podwatcher.errors import TransientFetchError

_log = structlog.get_logger(component="collector.snapshot")


class SnapshotProvider:
    """Wraps ``CoreV1Api.list_pod_for_all_namespaces``."""

    def __init__(self, core_v1: client.CoreV1Api) -> None:
        self._v1 = core_v1

    async def snapshot(self) -> str:
        """Return the resourceVersion of a fresh all-namespaces pod list.

        Raises TransientFetchError on API, network or timeout failures and
        when the response carries no resourceVersion.
        """
        try:
            pods = await self._v1.list_pod_for_all_namespaces()
        except client.ApiException as exc:
            raise TransientFetchError(f"pod list failed: {exc.status} {exc.reason}") from exc
        except (aiohttp.ClientError, OSError, asyncio.TimeoutError) as exc:
            raise TransientFetchError(f"pod list failed: {exc!r}") from exc

        metadata = getattr(pods, "metadata", None)
        resource_version = getattr(metadata, "resource_version", None)
        if not resource_version:
            raise TransientFetchError("pod list returned no resourceVersion")

        _log.debug(
            "pod_list_fetched",
            pods=len(getattr(pods, "items", None) or []),
            resource_version=resource_version,
        )
        return str(resource_version)
