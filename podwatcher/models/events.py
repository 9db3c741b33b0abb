"""Pod entity and change notification data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ChangeKind(StrEnum):
    """Watch event type as sent by the API server."""

    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class PodEntity:
    """Observed copy of a pod.

    ``body`` is the raw API object exactly as served (camelCase keys); it is
    what gets serialized for both filtering and output.
    """

    namespace: str
    name: str
    resource_version: str = ""
    body: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def identity(self) -> str:
        return f"{self.namespace}/{self.name}"

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> PodEntity:
        metadata = raw.get("metadata") or {}
        return cls(
            namespace=str(metadata.get("namespace", "")),
            name=str(metadata.get("name", "")),
            resource_version=str(metadata.get("resourceVersion", "")),
            body=raw,
        )


@dataclass(frozen=True)
class EntityChange:
    """An ADDED, MODIFIED or DELETED notification for one pod."""

    kind: ChangeKind
    entity: PodEntity


@dataclass(frozen=True)
class StreamError:
    """An ERROR notification: the subscription is no longer valid."""

    message: str
    code: int = 0
    reason: str = ""

    @property
    def kind(self) -> ChangeKind:
        return ChangeKind.ERROR


ChangeNotification = EntityChange | StreamError
