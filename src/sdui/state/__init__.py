"""Reactive session state."""

from .values import (
    StateValue,
    StringValue,
    IntValue,
    BoolValue,
    DoubleValue,
    ListValue,
    MapValue,
    JsonValue,
    REMOVED,
)
from .store import StateStore, StateChangeEvent, StateListener

__all__ = [
    "StateValue",
    "StringValue",
    "IntValue",
    "BoolValue",
    "DoubleValue",
    "ListValue",
    "MapValue",
    "JsonValue",
    "REMOVED",
    "StateStore",
    "StateChangeEvent",
    "StateListener",
]
