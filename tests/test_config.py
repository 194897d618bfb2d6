"""Tests for application configuration."""

import pytest

from demo_app.config import Settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that settings have expected default values."""
    monkeypatch.delenv("FAKESTORE_BASE_URL", raising=False)
    monkeypatch.delenv("FAKESTORE_TIMEOUT", raising=False)
    settings = Settings(_env_file=None)
    assert settings.api_port == 8000
    assert settings.debug is False
    assert "postgresql" in settings.database_url
    assert settings.fakestore_base_url == "https://fakestoreapi.com"
    assert settings.fakestore_timeout == 60.0


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that environment variables override defaults case-insensitively."""
    monkeypatch.setenv("FAKESTORE_BASE_URL", "http://localhost:3000")
    monkeypatch.setenv("fakestore_timeout", "5")
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/tasks")
    settings = Settings(_env_file=None)
    assert settings.fakestore_base_url == "http://localhost:3000"
    assert settings.fakestore_timeout == 5.0
    assert settings.database_url == "postgresql://u:p@db:5432/tasks"
