"""Pytest configuration and fixtures."""

import os

import pytest
import respx
from prometheus_client import CollectorRegistry

from sdui.codec import SduiCodec
from sdui.core import get_settings
from sdui.core.config import Settings
from sdui.monitoring import MetricsCollector
from sdui.state import StateStore
from sdui.validation import ComponentValidator


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ["SDUI_LOG_LEVEL"] = "DEBUG"
    os.environ["SDUI_ENABLE_CACHE"] = "false"  # Disable cache in tests


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    get_settings.cache_clear()
    return Settings(enable_cache=False)


@pytest.fixture
def metrics():
    """Metrics collector on a private registry."""
    return MetricsCollector(registry=CollectorRegistry())


@pytest.fixture
def codec(settings, metrics):
    """Codec without cache."""
    return SduiCodec(settings=settings, metrics=metrics)


@pytest.fixture
def validator(metrics):
    """Validator fixture."""
    return ComponentValidator(metrics=metrics)


@pytest.fixture
def store():
    """Empty state store."""
    return StateStore()


# ============================================================================
# HTTP/Network Fixtures
# ============================================================================

@pytest.fixture
def mock_httpx_client():
    """Mock httpx client."""
    with respx.mock:
        yield respx


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def sample_document():
    """Login screen document."""
    return """{
  "type": "Column",
  "id": "login",
  "style": {"padding": {"all": 16}, "backgroundColor": "#FFFFFF"},
  "children": [
    {"type": "Text", "id": "title", "text": "Welcome", "style": {"fontSize": 24, "fontWeight": "bold"}},
    {"type": "TextField", "id": "email", "placeholder": "Email", "keyboardType": "email"},
    {"type": "TextField", "id": "password", "placeholder": "Password", "isPassword": true},
    {
      "type": "Button",
      "id": "submit",
      "text": "Sign in",
      "action": {
        "type": "api_call",
        "url": "https://api.example.com/login",
        "method": "POST",
        "onSuccess": "navigate:home",
        "onError": "show_dialog:Login failed"
      }
    }
  ]
}"""
