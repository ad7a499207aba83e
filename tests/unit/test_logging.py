"""Tests for logging helpers."""

import io
import json
import logging

import pytest
import structlog

from sdui.core import LogContext, configure_logging, get_logger
from sdui.core.config import Settings
from sdui.core.logging_config import ENGINE_LOGGER


@pytest.mark.unit
def test_log_context_nests():
    """Inner scopes override and then restore outer values."""
    structlog.contextvars.clear_contextvars()

    with LogContext(action_type="navigate"):
        with LogContext(action_type="api_call", url="/x"):
            assert structlog.contextvars.get_contextvars() == {
                "action_type": "api_call",
                "url": "/x",
            }
        assert structlog.contextvars.get_contextvars() == {"action_type": "navigate"}

    assert structlog.contextvars.get_contextvars() == {}


@pytest.mark.unit
def test_dispatch_binds_action_type(store, settings, metrics):
    """Log lines emitted during dispatch carry the action type."""
    from sdui.models import CustomAction
    from sdui.runtime import DefaultActionDispatcher

    dispatcher = DefaultActionDispatcher(store, settings=settings, metrics=metrics)

    capture = structlog.testing.LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    try:
        dispatcher.dispatch(CustomAction(action="ghost"))
    finally:
        structlog.reset_defaults()

    missing = [entry for entry in capture.entries if entry["event"] == "custom_handler_missing"]
    assert missing[0]["action_type"] == "custom"
    assert missing[0]["name"] == "ghost"


@pytest.mark.unit
def test_get_logger():
    """Test logger factory."""
    assert get_logger(__name__) is not None


@pytest.fixture
def restore_logging():
    """Undo configure_logging after the test."""
    yield
    engine_logger = logging.getLogger(ENGINE_LOGGER)
    for handler in list(engine_logger.handlers):
        engine_logger.removeHandler(handler)
    engine_logger.propagate = True
    engine_logger.setLevel(logging.NOTSET)
    structlog.reset_defaults()


@pytest.mark.unit
def test_configure_json_logging(restore_logging):
    """JSON output carries the event and the bound context."""
    stream = io.StringIO()
    configure_logging(Settings(log_level="DEBUG", json_logs=True), stream=stream)

    with LogContext(action_type="reset"):
        get_logger("sdui.runtime").info("state_reset", keys=2)

    record = json.loads(stream.getvalue().splitlines()[-1])
    assert record["name"] == "sdui.runtime"
    event = json.loads(record["message"])
    assert event["event"] == "state_reset"
    assert event["action_type"] == "reset"
    assert event["keys"] == 2


@pytest.mark.unit
def test_configure_respects_level(restore_logging):
    """Records below the configured level are dropped."""
    stream = io.StringIO()
    engine_logger = configure_logging(Settings(log_level="WARNING"), stream=stream)

    get_logger("sdui.codec").info("decoded")
    get_logger("sdui.codec").warning("decode_failed")

    output = stream.getvalue()
    assert "decoded" not in output
    assert "decode_failed" in output
    assert engine_logger.propagate is False
    assert len(engine_logger.handlers) == 1
