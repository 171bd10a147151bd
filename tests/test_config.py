"""Tests for environment-driven configuration."""

import importlib

import pytest

from quickshare import config


def test_defaults():
    assert config.PRINTER_WIDTH_PX == 384
    assert config.SHARE_DIR
    assert config.LOG_LEVEL == config.LOG_LEVEL.upper()


@pytest.mark.parametrize("raw,expected", [("1", True), ("yes", True), ("ON", True), ("0", False), ("off", False)])
def test_env_flag(monkeypatch, raw, expected):
    monkeypatch.setenv("QUICKSHARE_TEST_FLAG", raw)
    assert config._env_flag("QUICKSHARE_TEST_FLAG") is expected


def test_env_flag_default_when_unset(monkeypatch):
    monkeypatch.delenv("QUICKSHARE_TEST_FLAG", raising=False)
    assert config._env_flag("QUICKSHARE_TEST_FLAG", default=True) is True


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("QUICKSHARE_DB_PATH", str(tmp_path / "qs.db"))
    monkeypatch.setenv("QUICKSHARE_USER_ID", "carol")
    monkeypatch.setenv("QUICKSHARE_OFFLINE", "true")
    monkeypatch.setenv("QUICKSHARE_LOG_LEVEL", "debug")
    try:
        reloaded = importlib.reload(config)
        assert reloaded.DB_PATH == str(tmp_path / "qs.db")
        assert reloaded.USER_ID == "carol"
        assert reloaded.OFFLINE is True
        assert reloaded.LOG_LEVEL == "DEBUG"
    finally:
        monkeypatch.undo()
        importlib.reload(config)
