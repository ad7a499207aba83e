"""Configuration tests."""

import pytest
from pydantic import ValidationError

from sdui.core import get_settings
from sdui.core.config import Settings


def test_settings_defaults(monkeypatch):
    """Test default settings load correctly."""
    monkeypatch.delenv("SDUI_ENABLE_CACHE", raising=False)
    settings = Settings()

    assert settings.max_document_size == 512 * 1024
    assert settings.max_json_depth == 64
    assert settings.repair_json is False
    assert settings.enable_cache is True
    assert settings.default_route == "home"
    assert settings.dialog_state_key == "currentDialog"


def test_settings_from_environment(monkeypatch):
    """Test SDUI_ prefixed variables are read."""
    monkeypatch.setenv("SDUI_DEFAULT_ROUTE", "dashboard")
    monkeypatch.setenv("SDUI_MAX_JSON_DEPTH", "12")
    monkeypatch.setenv("sdui_repair_json", "true")

    settings = Settings()

    assert settings.default_route == "dashboard"
    assert settings.max_json_depth == 12
    assert settings.repair_json is True


def test_settings_validation():
    """Test settings validation."""
    assert Settings(api_timeout=2.5).api_timeout == 2.5

    with pytest.raises(ValidationError):
        Settings(max_document_size=0)

    with pytest.raises(ValidationError):
        Settings(api_timeout=-1)


def test_get_settings_is_cached():
    """Test settings singleton."""
    get_settings.cache_clear()

    assert get_settings() is get_settings()
