"""Tests for application settings."""

from pathlib import Path

import pytest

from diet_manager.config import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STORAGE_ROOT", raising=False)
    monkeypatch.delenv("CLEAR_REDO_ON_PERFORM", raising=False)

    settings = Settings(_env_file=None)

    assert settings.storage_root == Path("database")
    assert settings.foods_path == Path("database") / "foods.txt"
    assert settings.logs_path == Path("database") / "logs.txt"
    assert not settings.clear_redo_on_perform


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STORAGE_ROOT", "/var/lib/diet")
    monkeypatch.setenv("CLEAR_REDO_ON_PERFORM", "true")

    settings = Settings(_env_file=None)

    assert settings.storage_root == Path("/var/lib/diet")
    assert settings.clear_redo_on_perform
