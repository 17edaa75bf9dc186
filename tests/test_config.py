"""Tests for settings loading."""

import pytest

from pantry_tracker.config import Settings


def test_settings_read_prefixed_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PANTRY_DEBUG", "true")
    monkeypatch.setenv("PANTRY_DISPLAY_MAX_DIGITS", "4")
    monkeypatch.setenv("PANTRY_LOG_LEVEL", "WARNING")

    settings = Settings()

    assert settings.debug
    assert settings.display_max_digits == 4
    assert settings.log_level == "WARNING"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    names = ("PANTRY_DEBUG", "PANTRY_DISPLAY_MAX_DIGITS", "PANTRY_TABLE_MAX_DIGITS")
    for name in names:
        monkeypatch.delenv(name, raising=False)

    settings = Settings(environment="test")

    assert not settings.debug
    assert settings.display_max_digits == 2
    assert settings.table_max_digits == 1
