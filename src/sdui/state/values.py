"""State values.

A closed set of value shapes held by the state store. Every variant answers
every typed getter: cross-type coercion never raises, it falls back to a
fixed, documented answer (a list's length as an int, a JSON blob's byte
length, and so on).
"""

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping

_INT = re.compile(r"[+-]?\d+")
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return text[1:-1]
    return text


def _parse_pairs(text: str, unquote: bool = False) -> dict[str, str]:
    """``k=v,k=v`` into a dict; segments without ``=`` are skipped."""
    pairs: dict[str, str] = {}
    for segment in text.split(","):
        key, sep, value = segment.strip().partition("=")
        if not sep:
            continue
        if unquote:
            key, value = _unquote(key.strip()), _unquote(value.strip())
        pairs[key] = value
    return pairs


def _to_int(text: str) -> int | None:
    # int() refuses very long digit strings
    try:
        return int(text)
    except ValueError:
        return None


def _parse_int(text: str) -> int:
    text = text.strip()
    if _INT.fullmatch(text) and (number := _to_int(text)) is not None:
        return number
    if _DECIMAL.fullmatch(text):
        return _truncate(float(text))
    return 0


def _parse_float(text: str) -> float:
    text = text.strip()
    return float(text) if _DECIMAL.fullmatch(text) else 0.0


def _truncate(value: float) -> int:
    return int(value) if math.isfinite(value) else 0


def _join_pairs(mapping: Mapping[str, str]) -> str:
    return ",".join(f"{k}={v}" for k, v in mapping.items())


class StateValue(ABC):
    """Base of the value union."""

    kind: str = ""
    value: Any

    @abstractmethod
    def as_string(self) -> str:
        pass

    @abstractmethod
    def as_bool(self) -> bool:
        pass

    @abstractmethod
    def as_int(self) -> int:
        pass

    @abstractmethod
    def as_double(self) -> float:
        pass

    def as_list(self) -> list[str]:
        return [self.as_string()]

    def as_map(self) -> dict[str, str]:
        return {"value": self.as_string()}

    @staticmethod
    def from_string(text: str) -> "StateValue":
        """
        Infer a value from raw text.

        Order: boolean (case-insensitive), integer, decimal, ``[a, b]`` list,
        ``{k=v, k=v}`` map, otherwise the string itself.
        """
        lowered = text.lower()
        if lowered == "true":
            return BoolValue(True)
        if lowered == "false":
            return BoolValue(False)
        if _INT.fullmatch(text) and (number := _to_int(text)) is not None:
            return IntValue(number)
        if _DECIMAL.fullmatch(text):
            return DoubleValue(float(text))
        if text.startswith("[") and text.endswith("]") and len(text) >= 2:
            items = (_unquote(item.strip()) for item in text[1:-1].split(","))
            return ListValue(tuple(item for item in items if item))
        if text.startswith("{") and text.endswith("}") and len(text) >= 2:
            return MapValue(_parse_pairs(text[1:-1], unquote=True))
        return StringValue(text)

    @staticmethod
    def of(value: Any) -> "StateValue":
        """Wrap a plain Python value; ``str`` goes through :meth:`from_string`."""
        if isinstance(value, StateValue):
            return value
        if isinstance(value, bool):
            return BoolValue(value)
        if isinstance(value, int):
            return IntValue(value)
        if isinstance(value, float):
            return DoubleValue(value)
        if isinstance(value, str):
            return StateValue.from_string(value)
        if isinstance(value, Mapping):
            return MapValue({str(k): str(v) for k, v in value.items()})
        if isinstance(value, (list, tuple, set, frozenset)):
            return ListValue(tuple(str(item) for item in value))
        raise TypeError(f"Unsupported state value type: {type(value).__name__}")


@dataclass(frozen=True)
class StringValue(StateValue):
    value: str
    kind: str = field(default="string", init=False, repr=False)

    def as_string(self) -> str:
        return self.value

    def as_bool(self) -> bool:
        return self.value.lower() == "true"

    def as_int(self) -> int:
        return _parse_int(self.value)

    def as_double(self) -> float:
        return _parse_float(self.value)

    def as_list(self) -> list[str]:
        return [item.strip() for item in self.value.split(",")]

    def as_map(self) -> dict[str, str]:
        return _parse_pairs(self.value)


@dataclass(frozen=True)
class IntValue(StateValue):
    value: int
    kind: str = field(default="int", init=False, repr=False)

    def as_string(self) -> str:
        return str(self.value)

    def as_bool(self) -> bool:
        return self.value != 0

    def as_int(self) -> int:
        return self.value

    def as_double(self) -> float:
        try:
            return float(self.value)
        except OverflowError:
            return math.inf if self.value > 0 else -math.inf


@dataclass(frozen=True)
class BoolValue(StateValue):
    value: bool
    kind: str = field(default="bool", init=False, repr=False)

    def as_string(self) -> str:
        return "true" if self.value else "false"

    def as_bool(self) -> bool:
        return self.value

    def as_int(self) -> int:
        return 1 if self.value else 0

    def as_double(self) -> float:
        return 1.0 if self.value else 0.0


@dataclass(frozen=True)
class DoubleValue(StateValue):
    value: float
    kind: str = field(default="double", init=False, repr=False)

    def as_string(self) -> str:
        return repr(self.value)

    def as_bool(self) -> bool:
        return self.value != 0.0

    def as_int(self) -> int:
        return _truncate(self.value)

    def as_double(self) -> float:
        return self.value


@dataclass(frozen=True)
class ListValue(StateValue):
    value: tuple[str, ...] = ()
    kind: str = field(default="list", init=False, repr=False)

    def as_string(self) -> str:
        return ",".join(self.value)

    def as_bool(self) -> bool:
        return bool(self.value)

    def as_int(self) -> int:
        return len(self.value)

    def as_double(self) -> float:
        return float(len(self.value))

    def as_list(self) -> list[str]:
        return list(self.value)

    def as_map(self) -> dict[str, str]:
        return {item: item for item in self.value}


@dataclass(frozen=True)
class MapValue(StateValue):
    value: dict[str, str] = field(default_factory=dict)
    kind: str = field(default="map", init=False, repr=False)

    def as_string(self) -> str:
        return _join_pairs(self.value)

    def as_bool(self) -> bool:
        return bool(self.value)

    def as_int(self) -> int:
        return len(self.value)

    def as_double(self) -> float:
        return float(len(self.value))

    def as_list(self) -> list[str]:
        return [f"{k}={v}" for k, v in self.value.items()]

    def as_map(self) -> dict[str, str]:
        return dict(self.value)


@dataclass(frozen=True)
class JsonValue(StateValue):
    """Raw JSON text, stored as-is."""

    value: str
    kind: str = field(default="json", init=False, repr=False)

    def as_string(self) -> str:
        return self.value

    def as_bool(self) -> bool:
        return bool(self.value)

    def as_int(self) -> int:
        return len(self.value.encode("utf-8"))

    def as_double(self) -> float:
        return float(self.as_int())

    def as_map(self) -> dict[str, str]:
        return {"json": self.value}


# Delivered as ``new_value`` when a key is removed or cleared
REMOVED = StringValue("")
