"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    DecodeError,
    parse_json,
    safe_json_dumps,
    validate_json_size,
    validate_json_depth,
)
from .hash import hash_string, hash_bytes
from .cache import LRUCache, Stats
from .id import ComponentID, new_component_id


def create_container(settings: Settings | None = None, **collaborators):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings, **collaborators)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "DecodeError",
    "parse_json",
    "safe_json_dumps",
    "validate_json_size",
    "validate_json_depth",
    # Hashing
    "hash_string",
    "hash_bytes",
    # Caching
    "LRUCache",
    "Stats",
    # IDs
    "ComponentID",
    "new_component_id",
    # DI
    "create_container",
]
