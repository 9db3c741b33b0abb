"""Tests for configuration loading."""

from __future__ import annotations

import pytest

from podwatcher.config import load_config
from podwatcher.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "MARKER",
        "STOP_ON_DELETE",
        "KUBECONFIG",
        "LOG_LEVEL",
        "LIST_RETRY_DELAY",
        "RESTART_DELAY",
        "WATCH_TIMEOUT",
    ):
        monkeypatch.delenv(f"PODWATCHER_{key}", raising=False)


class TestDefaults:
    def test_defaults_with_marker(self) -> None:
        config = load_config(marker="DEBUG_MODE")
        assert config.watch.marker == "DEBUG_MODE"
        assert config.watch.stop_on_delete is False
        assert config.watch.list_retry_delay == 2.0
        assert config.watch.restart_delay == 1.0
        assert config.watch.watch_timeout_seconds is None
        assert config.kube.kubeconfig == ""
        assert config.log.level == "info"


class TestEnvironment:
    def test_reads_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PODWATCHER_MARKER", "from-env")
        monkeypatch.setenv("PODWATCHER_STOP_ON_DELETE", "true")
        monkeypatch.setenv("PODWATCHER_KUBECONFIG", "/tmp/kubeconfig")
        monkeypatch.setenv("PODWATCHER_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("PODWATCHER_WATCH_TIMEOUT", "300")
        config = load_config()
        assert config.watch.marker == "from-env"
        assert config.watch.stop_on_delete is True
        assert config.kube.kubeconfig == "/tmp/kubeconfig"
        assert config.log.level == "debug"
        assert config.watch.watch_timeout_seconds == 300

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PODWATCHER_MARKER", "from-env")
        monkeypatch.setenv("PODWATCHER_STOP_ON_DELETE", "true")
        config = load_config(marker="from-cli", stop_on_delete=False)
        assert config.watch.marker == "from-cli"
        assert config.watch.stop_on_delete is False

    def test_delays_are_clamped(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PODWATCHER_LIST_RETRY_DELAY", "0")
        monkeypatch.setenv("PODWATCHER_RESTART_DELAY", "999")
        config = load_config(marker="m")
        assert config.watch.list_retry_delay == 0.1
        assert config.watch.restart_delay == 60.0


class TestValidation:
    def test_missing_marker(self) -> None:
        with pytest.raises(ConfigurationError, match="marker"):
            load_config()

    def test_empty_marker(self) -> None:
        with pytest.raises(ConfigurationError):
            load_config(marker="")

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ConfigurationError, match="log level"):
            load_config(marker="m", log_level="verbose")

    def test_non_numeric_delay(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PODWATCHER_RESTART_DELAY", "soon")
        with pytest.raises(ConfigurationError):
            load_config(marker="m")
