"""Target lock for stop-on-delete mode.

The first pod that matches the marker becomes the target. From then on only
that pod is emitted, and its deletion ends the watch. The lock never
releases, not even across stream restarts.
"""

from __future__ import annotations

from enum import Flag, auto

import structlog

from podwatcher.models.events import ChangeKind

_log = structlog.get_logger(component="lock")


class Decision(Flag):
    """Outcome of TargetLock.consider(); SUPPRESS is falsy."""

    SUPPRESS = 0
    EMIT = auto()
    TERMINATE_AFTER_EMIT = auto()


class TargetLock:
    """Pins the first matching pod identity."""

    def __init__(self) -> None:
        self._target: str | None = None

    @property
    def target(self) -> str | None:
        return self._target

    @property
    def locked(self) -> bool:
        return self._target is not None

    def consider(self, identity: str, change_kind: ChangeKind) -> Decision:
        """Decide whether a matching notification for *identity* is emitted.

        Must only be called for notifications that already passed the marker
        filter.
        """
        if self._target is None:
            self._target = identity
            _log.info("target_acquired", pod=identity)
        elif identity != self._target:
            return Decision.SUPPRESS

        if change_kind == ChangeKind.DELETED:
            return Decision.EMIT | Decision.TERMINATE_AFTER_EMIT
        return Decision.EMIT
