"""Action dispatch runtime."""

from .collaborators import (
    ApiResponse,
    ApiCaller,
    CustomHandler,
    DialogPresenter,
    FormSubmitter,
    Navigator,
    TaskScope,
)
from .chained import parse_chained_action, parse_query
from .dispatcher import (
    ActionDispatcher,
    DefaultActionDispatcher,
    DispatchPhase,
    LoggingActionDispatcher,
    NullActionDispatcher,
    Transition,
)
from .http import HttpApiClient

__all__ = [
    "ApiResponse",
    "ApiCaller",
    "CustomHandler",
    "DialogPresenter",
    "FormSubmitter",
    "Navigator",
    "TaskScope",
    "parse_chained_action",
    "parse_query",
    "ActionDispatcher",
    "DefaultActionDispatcher",
    "DispatchPhase",
    "LoggingActionDispatcher",
    "NullActionDispatcher",
    "Transition",
    "HttpApiClient",
]
