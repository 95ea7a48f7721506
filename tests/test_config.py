from __future__ import annotations

import pytest

from listonthego.config import BaseConfig, TestConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "LISTONTHEGO_DATABASE_URL",
        "LISTONTHEGO_ANALYTICS_WINDOW_DAYS",
        "LISTONTHEGO_SIBLING_RATE_PLACEHOLDER",
        "LISTONTHEGO_DEV_MODE",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(tmp_path):
    config = BaseConfig(tmp_path)

    assert config.DATA_DIR == tmp_path.resolve()
    assert config.DATABASE_URL == f"sqlite:///{tmp_path.resolve() / 'listonthego.db'}"
    assert config.ANALYTICS_WINDOW_DAYS == 30
    assert config.SIBLING_RATE_PLACEHOLDER == 70.0
    assert config.DEV_MODE is True
    assert config.sqlalchemy_engine_options() == {"connect_args": {"check_same_thread": False}}


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("LISTONTHEGO_DATABASE_URL", "sqlite:///elsewhere.db")
    monkeypatch.setenv("LISTONTHEGO_ANALYTICS_WINDOW_DAYS", "14")
    monkeypatch.setenv("LISTONTHEGO_SIBLING_RATE_PLACEHOLDER", "55.5")
    monkeypatch.setenv("LISTONTHEGO_DEV_MODE", "off")

    config = BaseConfig(tmp_path)

    assert config.DATABASE_URL == "sqlite:///elsewhere.db"
    assert config.ANALYTICS_WINDOW_DAYS == 14
    assert config.SIBLING_RATE_PLACEHOLDER == 55.5
    assert config.DEV_MODE is False


@pytest.mark.parametrize("raw", ["thirty", "0", "-3"])
def test_invalid_window_is_rejected(tmp_path, monkeypatch, raw):
    monkeypatch.setenv("LISTONTHEGO_ANALYTICS_WINDOW_DAYS", raw)
    with pytest.raises(ValueError, match="LISTONTHEGO_ANALYTICS_WINDOW_DAYS"):
        BaseConfig(tmp_path)


def test_test_config_uses_memory_database(tmp_path):
    config = TestConfig(tmp_path)

    assert config.DATABASE_URL == "sqlite://"
    assert config.DEV_MODE is False
    assert config.TESTING is True
