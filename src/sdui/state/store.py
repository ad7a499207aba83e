"""Reactive State Store.

Flat key/value map scoped to one UI session. Every mutation replaces a whole
key and notifies listeners synchronously, in registration order.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator

from ..core import get_logger
from .values import REMOVED, JsonValue, StateValue

logger = get_logger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class StateChangeEvent:
    """One mutation. Removals carry an empty string as ``new_value``."""

    key: str
    old_value: StateValue | None
    new_value: StateValue
    timestamp: int = field(default_factory=_now_ms)

    @property
    def is_removal(self) -> bool:
        return self.new_value is REMOVED


StateListener = Callable[[StateChangeEvent], None]


class StateStore:
    """
    Session state with typed, coercing getters.

    Examples:
        >>> store = StateStore()
        >>> store.set("count", "3")
        >>> store.as_int("count")
        3
        >>> store.as_bool("count")
        True
    """

    def __init__(self) -> None:
        self._values: dict[str, StateValue] = {}
        self._listeners: list[StateListener] = []
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, key: str) -> StateValue | None:
        return self._values.get(key)

    def as_string(self, key: str) -> str | None:
        value = self.get(key)
        return value.as_string() if value is not None else None

    def as_bool(self, key: str) -> bool | None:
        value = self.get(key)
        return value.as_bool() if value is not None else None

    def as_int(self, key: str) -> int | None:
        value = self.get(key)
        return value.as_int() if value is not None else None

    def as_double(self, key: str) -> float | None:
        value = self.get(key)
        return value.as_double() if value is not None else None

    def as_list(self, key: str) -> list[str] | None:
        value = self.get(key)
        return value.as_list() if value is not None else None

    def as_map(self, key: str) -> dict[str, str] | None:
        value = self.get(key)
        return value.as_map() if value is not None else None

    def keys(self) -> set[str]:
        with self._lock:
            return set(self._values)

    def has(self, key: str) -> bool:
        return key in self._values

    def snapshot(self) -> dict[str, StateValue]:
        """Point-in-time copy of every key."""
        with self._lock:
            return dict(self._values)

    def as_string_map(self) -> dict[str, str]:
        return {key: value.as_string() for key, value in self.snapshot().items()}

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        """
        Store a value under ``key``.

        Args:
            key: State key (often a node id)
            value: A StateValue, or a plain value; strings are type-inferred
        """
        new_value = StateValue.of(value)
        with self._lock:
            old_value = self._values.get(key)
            self._values[key] = new_value
        self._notify(StateChangeEvent(key, old_value, new_value))

    def set_json(self, key: str, raw: str) -> None:
        """Store raw JSON text without inference."""
        self.set(key, JsonValue(raw))

    def remove(self, key: str) -> None:
        """Remove ``key``; a missing key is not a mutation."""
        with self._lock:
            if key not in self._values:
                return
            old_value = self._values.pop(key)
        self._notify(StateChangeEvent(key, old_value, REMOVED))

    def clear(self) -> None:
        """Remove every key, one event per key that was held."""
        with self._lock:
            previous = self._values
            self._values = {}
        for key, old_value in previous.items():
            self._notify(StateChangeEvent(key, old_value, REMOVED))
        if previous:
            logger.debug("state_cleared", keys=len(previous))

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: StateListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: StateListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def _notify(self, event: StateChangeEvent) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error(
                    "state_listener_failed",
                    key=event.key,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(e),
                    exc_info=True,
                )
