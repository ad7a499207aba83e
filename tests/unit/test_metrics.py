"""Tests for Prometheus metrics."""

import pytest
from prometheus_client import CollectorRegistry

from sdui.monitoring import MetricsCollector


@pytest.mark.unit
def test_collectors_are_isolated():
    """Private registries do not share counts."""
    first = MetricsCollector(CollectorRegistry())
    second = MetricsCollector(CollectorRegistry())

    first.record_action("navigate", "ok")

    assert first.registry.get_sample_value(
        "sdui_actions_total", {"action_type": "navigate", "status": "ok"}
    ) == 1
    assert second.registry.get_sample_value(
        "sdui_actions_total", {"action_type": "navigate", "status": "ok"}
    ) is None


@pytest.mark.unit
def test_async_operation_duration(metrics):
    """Test duration histogram per kind."""
    metrics.record_async_operation("api_call", "success", 0.2)

    assert metrics.registry.get_sample_value(
        "sdui_async_duration_seconds_count", {"kind": "api_call"}
    ) == 1


@pytest.mark.unit
def test_exposition_format(metrics):
    """Test text exposition."""
    metrics.record_decode("success", 0.001)
    metrics.record_validation_issue("error")
    metrics.record_error("ValueError", "codec")

    output = metrics.get_metrics().decode("utf-8")

    assert "sdui_decode_total" in output
    assert 'sdui_validation_issues_total{severity="error"} 1.0' in output
    assert "sdui_errors_total" in output
