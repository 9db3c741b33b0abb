"""Shared fixtures for podwatcher tests.

Provides pod body factories and notification helpers so tests can drive the
watch loop without touching a real Kubernetes cluster.
"""

from __future__ import annotations

import io
from typing import Any

import pytest

from podwatcher.gate import CancellationGate
from podwatcher.models.events import ChangeKind, EntityChange, PodEntity, StreamError
from podwatcher.output import DocumentWriter

# ---------------------------------------------------------------------------
# Pod factory helpers
# ---------------------------------------------------------------------------


def make_pod_body(
    name: str = "my-app-7b4f8c6d-x2kj",
    namespace: str = "default",
    resource_version: str = "1001",
    env_value: str = "production",
    labels: dict[str, str] | None = None,
) -> dict[str, Any]:
    """Create a raw Pod object as served by the API (camelCase keys)."""
    return {
        "apiVersion": "v1",
        "kind": "Pod",
        "metadata": {
            "name": name,
            "namespace": namespace,
            "resourceVersion": resource_version,
            "labels": labels or {"app": "my-app"},
        },
        "spec": {
            "containers": [
                {
                    "name": "my-app",
                    "image": "my-app:v2",
                    "env": [{"name": "MODE", "value": env_value}],
                }
            ],
            "nodeName": "node-1",
        },
        "status": {"phase": "Running"},
    }


def make_change(kind: ChangeKind = ChangeKind.ADDED, **kwargs: Any) -> EntityChange:
    """Create an EntityChange for a pod built by make_pod_body()."""
    return EntityChange(kind=kind, entity=PodEntity.from_raw(make_pod_body(**kwargs)))


def make_error(message: str = "too old resource version: 1 (2)", code: int = 410) -> StreamError:
    return StreamError(message=message, code=code, reason="Expired")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def gate() -> CancellationGate:
    return CancellationGate()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def writer(output: io.StringIO) -> DocumentWriter:
    return DocumentWriter(output)
