"""Exception taxonomy for podwatcher.

Only ConfigurationError is fatal. Transient fetch/watch errors are recovered
by the supervisor's relist path, serialization and payload errors drop a
single notification, and CancellationRequested is a normal way to stop.
"""

from __future__ import annotations


class PodWatcherError(Exception):
    """Base class for all podwatcher errors."""


class ConfigurationError(PodWatcherError):
    """Invalid settings or Kubernetes credentials that cannot be loaded."""


class TransientFetchError(PodWatcherError):
    """The pod listing could not be obtained; retry after a short delay."""


class TransientWatchError(PodWatcherError):
    """The watch subscription could not be opened or broke mid-stream."""


class SerializationError(PodWatcherError):
    """A pod body could not be rendered to YAML."""

    def __init__(self, identity: str, cause: Exception) -> None:
        super().__init__(f"cannot serialize pod {identity}: {cause}")
        self.identity = identity
        self.cause = cause


class UnexpectedPayloadError(PodWatcherError):
    """A watch event carried neither a Pod nor an error Status."""


class CancellationRequested(PodWatcherError):
    """Shutdown was requested while waiting; not a failure."""
