# src/reqlog/tests/test_config/test_settings.py
from pathlib import Path

import pytest
from pydantic import ValidationError

from reqlog.config.settings import Settings, get_settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.LOG_FILE == Path("logs/ring.log")
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_PREFIX_FORMAT == "production"
    assert settings.LOG_TO_STDOUT is False
    assert settings.LOG_COLOR is True
    assert settings.LOG_USE_QUEUE is False
    assert settings.palette_colors == ("red", "green", "yellow", "blue", "magenta", "cyan", "white")


def test_env_values_are_normalised(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_PREFIX_FORMAT", "DEBUGGING")
    monkeypatch.setenv("LOG_PALETTE", " Red, BLUE ,")
    monkeypatch.setenv("LOG_FILE", "/tmp/reqlog/access.log")

    settings = Settings(_env_file=None)

    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_PREFIX_FORMAT == "debugging"
    assert settings.palette_colors == ("red", "blue")
    assert settings.LOG_FILE == Path("/tmp/reqlog/access.log")


def test_invalid_level_is_rejected(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    assert get_settings() is get_settings()


def test_model_copy_overrides_without_mutating_defaults(tmp_path):
    base = Settings(_env_file=None)
    override = base.model_copy(update={"LOG_FILE": tmp_path / "other.log"})
    assert override.LOG_FILE == tmp_path / "other.log"
    assert base.LOG_FILE == Path("logs/ring.log")
