"""Configuration loading from environment variables and CLI overrides."""

from __future__ import annotations

import os

from podwatcher.errors import ConfigurationError
from podwatcher.models.config import KubeConfig, LogConfig, PodWatcherConfig, WatchConfig


def _env(key: str, default: str = "") -> str:
    return os.environ.get(f"PODWATCHER_{key}", default)


def _env_bool(key: str, default: bool = False) -> bool:
    val = _env(key, str(default).lower())
    return val.lower() in ("true", "1", "yes")


def _env_float(key: str, default: float, min_val: float | None = None, max_val: float | None = None) -> float:
    val = float(_env(key, str(default)))
    if min_val is not None:
        val = max(val, min_val)
    if max_val is not None:
        val = min(val, max_val)
    return val


def _env_optional_int(key: str, min_val: int = 1) -> int | None:
    raw = _env(key, "")
    if not raw:
        return None
    return max(int(raw), min_val)


def _validate_marker(value: str) -> str:
    if not value:
        raise ValueError("marker must be a non-empty string")
    return value


def _validate_log_level(value: str) -> str:
    valid = {"debug", "info", "warning", "error"}
    if value.lower() not in valid:
        raise ValueError(f"Invalid log level: {value}. Must be one of {valid}")
    return value.lower()


def load_config(
    *,
    marker: str | None = None,
    stop_on_delete: bool | None = None,
    kubeconfig: str | None = None,
    log_level: str | None = None,
) -> PodWatcherConfig:
    """Load configuration from PODWATCHER_* environment variables.

    Keyword arguments that are not None take precedence over the
    environment. Raises ConfigurationError on invalid values.
    """
    try:
        return PodWatcherConfig(
            watch=WatchConfig(
                marker=_validate_marker(marker if marker is not None else _env("MARKER")),
                stop_on_delete=(
                    stop_on_delete if stop_on_delete is not None else _env_bool("STOP_ON_DELETE", False)
                ),
                list_retry_delay=_env_float("LIST_RETRY_DELAY", 2.0, min_val=0.1, max_val=60.0),
                restart_delay=_env_float("RESTART_DELAY", 1.0, min_val=0.1, max_val=60.0),
                watch_timeout_seconds=_env_optional_int("WATCH_TIMEOUT"),
            ),
            kube=KubeConfig(
                kubeconfig=kubeconfig if kubeconfig is not None else _env("KUBECONFIG"),
            ),
            log=LogConfig(
                level=_validate_log_level(log_level if log_level is not None else _env("LOG_LEVEL", "info")),
            ),
        )
    except ValueError as exc:
        raise ConfigurationError(str(exc)) from exc
