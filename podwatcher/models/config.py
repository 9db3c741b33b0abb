"""Configuration data structures."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class WatchConfig:
    """Watch loop configuration."""

    marker: str = ""
    stop_on_delete: bool = False
    list_retry_delay: float = 2.0
    restart_delay: float = 1.0
    watch_timeout_seconds: int | None = None


@dataclass
class KubeConfig:
    """Kubernetes credentials configuration."""

    kubeconfig: str = ""


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "info"


@dataclass
class PodWatcherConfig:
    """Top-level podwatcher configuration."""

    watch: WatchConfig = field(default_factory=WatchConfig)
    kube: KubeConfig = field(default_factory=KubeConfig)
    log: LogConfig = field(default_factory=LogConfig)
