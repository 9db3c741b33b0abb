"""Core data structures for podwatcher."""

from podwatcher.models.config import KubeConfig, LogConfig, PodWatcherConfig, WatchConfig
from podwatcher.models.events import (
    ChangeKind,
    ChangeNotification,
    EntityChange,
    PodEntity,
    StreamError,
)

__all__ = [
    "ChangeKind",
    "ChangeNotification",
    "EntityChange",
    "KubeConfig",
    "LogConfig",
    "PodEntity",
    "PodWatcherConfig",
    "StreamError",
    "WatchConfig",
]
