"""Tests for operator configuration."""

from __future__ import annotations

import pytest

from langfuse_operator.config import OperatorConfig, get_config, reset_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "LANGFUSE_HOST",
        "LANGFUSE_ADMIN_KEY",
        "LANGFUSE_REQUEST_TIMEOUT",
        "DRIFT_CHECK_INTERVAL_SECONDS",
        "METRICS_PORT",
    ):
        monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


class TestOperatorConfig:
    """Test cases for OperatorConfig.from_env."""

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("LANGFUSE_HOST", "https://langfuse.test")
        monkeypatch.setenv("LANGFUSE_ADMIN_KEY", "admin")

        config = OperatorConfig.from_env()

        assert config.host == "https://langfuse.test"
        assert config.admin_api_key == "admin"
        assert config.request_timeout == 30.0
        assert config.metrics_port == 8080

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("LANGFUSE_HOST", "https://langfuse.test")
        monkeypatch.setenv("LANGFUSE_ADMIN_KEY", "admin")
        monkeypatch.setenv("LANGFUSE_REQUEST_TIMEOUT", "5")
        monkeypatch.setenv("METRICS_PORT", "9090")

        config = OperatorConfig.from_env()

        assert config.request_timeout == 5.0
        assert config.metrics_port == 9090

    def test_missing_host(self, monkeypatch):
        monkeypatch.setenv("LANGFUSE_ADMIN_KEY", "admin")

        with pytest.raises(ValueError, match="LANGFUSE_HOST"):
            OperatorConfig.from_env()

    def test_missing_admin_key(self, monkeypatch):
        monkeypatch.setenv("LANGFUSE_HOST", "https://langfuse.test")

        with pytest.raises(ValueError, match="LANGFUSE_ADMIN_KEY"):
            OperatorConfig.from_env()

    def test_repr_hides_admin_key(self):
        config = OperatorConfig(host="https://langfuse.test", admin_api_key="super-secret")

        assert "super-secret" not in repr(config)


class TestGetConfig:
    """Test cases for get_config."""

    def test_loads_once(self, monkeypatch):
        monkeypatch.setenv("LANGFUSE_HOST", "https://langfuse.test")
        monkeypatch.setenv("LANGFUSE_ADMIN_KEY", "admin")

        first = get_config()
        monkeypatch.setenv("LANGFUSE_HOST", "https://other.test")

        assert get_config() is first
        reset_config()
        assert get_config().host == "https://other.test"
