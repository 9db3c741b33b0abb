"""Marker filter: canonical YAML serialization plus substring containment."""

from __future__ import annotations

import yaml

from podwatcher.errors import SerializationError
from podwatcher.models.events import PodEntity

# Never fold long scalars, a marker must not be split across lines.
_NO_WRAP = 2**31 - 1


def serialize_entity(entity: PodEntity) -> str:
    """Render the pod body as block-style YAML with sorted keys.

    Raises SerializationError if the body holds values YAML cannot represent.
    """
    try:
        return yaml.safe_dump(
            entity.body,
            default_flow_style=False,
            sort_keys=True,
            allow_unicode=True,
            width=_NO_WRAP,
        )
    except yaml.YAMLError as exc:
        raise SerializationError(entity.identity, exc) from exc


def contains_marker(serialized: str, marker: str) -> bool:
    """Case-sensitive, unanchored containment test."""
    return marker in serialized


def matches(entity: PodEntity, marker: str) -> bool:
    """Return True if the canonical serialization of *entity* contains *marker*."""
    return contains_marker(serialize_entity(entity), marker)
