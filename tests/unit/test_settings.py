"""Unit tests for operator settings."""

import pytest
from globalnet.types.settings import Settings, _getenv


class TestGetenv:
    def test_bool_values(self, monkeypatch):
        monkeypatch.setenv("GLOBALNET_TEST_FLAG", "yes")
        assert _getenv("GLOBALNET_TEST_FLAG", False) is True
        monkeypatch.setenv("GLOBALNET_TEST_FLAG", "false")
        assert _getenv("GLOBALNET_TEST_FLAG", True) is False

    def test_string_value(self, monkeypatch):
        monkeypatch.setenv("GLOBALNET_TEST_CIDR", "10.0.0.0/8")
        assert _getenv("GLOBALNET_TEST_CIDR", "x") == "10.0.0.0/8"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("GLOBALNET_TEST_MISSING", raising=False)
        assert _getenv("GLOBALNET_TEST_MISSING", 7) == 7

    def test_missing_without_default(self, monkeypatch):
        monkeypatch.delenv("GLOBALNET_TEST_MISSING", raising=False)
        with pytest.raises(KeyError):
            _getenv("GLOBALNET_TEST_MISSING")


class TestSettings:
    def test_overrides(self):
        conf = Settings(
            global_cidr="10.0.0.0/16",
            requeue_delay_seconds=5,
            persist_failure_status=True,
            worker_limit=1,
            metrics_enabled=False,
        )
        assert conf.global_cidr == "10.0.0.0/16"
        assert conf.requeue_delay_seconds == 5
        assert conf.persist_failure_status is True
        assert conf.worker_limit == 1
        assert conf.metrics_enabled is False

    def test_defaults_are_kept(self):
        conf = Settings(worker_limit=8)
        assert conf.global_cidr == Settings.global_cidr
        assert conf.persist_failure_status == Settings.persist_failure_status
