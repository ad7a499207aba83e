"""
Structured Logging Configuration
Engine logging with structlog, routed through the ``sdui`` stdlib logger.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger.json import JsonFormatter

from .config import Settings, get_settings

ENGINE_LOGGER = "sdui"


def _renderer(json_logs: bool) -> list[Any]:
    if json_logs:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    # ConsoleRenderer prints tracebacks itself
    return [structlog.dev.ConsoleRenderer()]


def configure_logging(settings: Settings | None = None, stream: Any = None) -> logging.Logger:
    """
    Configure structured logging for the engine.

    Only the ``sdui`` logger gets a handler, so a host application's own
    logging setup is left alone. Calling this again replaces the handler.

    Args:
        settings: Source of ``log_level`` and ``json_logs`` (environment when omitted)
        stream: Output stream (stdout by default)

    Returns:
        The configured ``sdui`` stdlib logger
    """
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stdout)
    if settings.json_logs:
        handler.setFormatter(JsonFormatter("%(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))

    engine_logger = logging.getLogger(ENGINE_LOGGER)
    for existing in list(engine_logger.handlers):
        engine_logger.removeHandler(existing)
    engine_logger.addHandler(handler)
    engine_logger.setLevel(log_level)
    engine_logger.propagate = False

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(settings.json_logs),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )
    return engine_logger


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger (``name`` is normally ``__name__``)."""
    return structlog.get_logger(name)


class LogContext:
    """Bind context vars for every log line emitted inside the scope."""

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self.token: Any = None

    def __enter__(self) -> "LogContext":
        self.token = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        # Restore outer values so nested scopes compose
        structlog.contextvars.reset_contextvars(**self.token)
