"""
Server-Driven UI engine.

Decode a JSON document into a typed component tree, validate it, resolve its
styles, and drive interaction through actions backed by a reactive state
store.
"""

from .core import DecodeError, Settings, configure_logging, create_container, get_settings
from .codec import SduiCodec, decode, decode_many, encode
from .models import Action, BaseComponent, Component, Style
from .runtime import (
    ActionDispatcher,
    ApiResponse,
    DefaultActionDispatcher,
    DispatchPhase,
    HttpApiClient,
    LoggingActionDispatcher,
    NullActionDispatcher,
)
from .state import StateChangeEvent, StateStore, StateValue
from .styling import ResolvedStyle, resolve
from .validation import (
    ComponentValidator,
    Severity,
    ValidationIssue,
    ValidationReport,
    validate,
    validate_all,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Core
    "DecodeError",
    "Settings",
    "configure_logging",
    "create_container",
    "get_settings",
    # Codec
    "SduiCodec",
    "decode",
    "decode_many",
    "encode",
    # Model
    "Action",
    "BaseComponent",
    "Component",
    "Style",
    # Styling
    "ResolvedStyle",
    "resolve",
    # Validation
    "ComponentValidator",
    "Severity",
    "ValidationIssue",
    "ValidationReport",
    "validate",
    "validate_all",
    # State
    "StateChangeEvent",
    "StateStore",
    "StateValue",
    # Runtime
    "ActionDispatcher",
    "ApiResponse",
    "DefaultActionDispatcher",
    "DispatchPhase",
    "HttpApiClient",
    "LoggingActionDispatcher",
    "NullActionDispatcher",
]
