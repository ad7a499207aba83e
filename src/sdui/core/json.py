"""Fast JSON parsing with multiple backends and positional decode errors."""

from typing import Any
import json

import msgspec
import orjson
from json_repair import repair_json


class DecodeError(Exception):
    """Wire document could not be turned into a component tree."""

    def __init__(
        self,
        message: str,
        details: str | None = None,
        line: int | None = None,
        column: int | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        self.line = line
        self.column = column
        self.original = original

    def to_dict(self) -> dict[str, Any]:
        """Export for host error displays."""
        return {
            "message": self.message,
            "details": self.details,
            "line": self.line,
            "column": self.column,
        }


def parse_json(text: str | bytes, repair: bool = False) -> Any:
    """
    Parse a JSON document with the fastest backend, falling back for diagnostics.

    Args:
        text: JSON document
        repair: Attempt to repair invalid JSON with json_repair

    Returns:
        Parsed JSON value

    Raises:
        DecodeError: If the document is not valid JSON
    """
    data = text.encode("utf-8") if isinstance(text, str) else text

    # Try msgspec first (fastest)
    try:
        return msgspec.json.decode(data)
    except msgspec.DecodeError as e:
        fast_error: Exception = e

    # Standard library reports line/column
    source = data.decode("utf-8", errors="replace")
    try:
        return json.loads(source)
    except json.JSONDecodeError as e:
        if not repair:
            raise DecodeError(
                f"JSON parsing failed: {e.msg}",
                details=str(fast_error),
                line=e.lineno,
                column=e.colno,
                original=e,
            ) from e
        position = (e.lineno, e.colno)

    # Last resort: try json_repair
    repaired = repair_json(source)
    try:
        return json.loads(repaired)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"JSON repair failed: {e.msg}",
            line=position[0],
            column=position[1],
            original=e,
        ) from e


def safe_json_dumps(obj: Any, **kwargs: Any) -> str:
    """
    Encode object to JSON string using fastest available library.

    Args:
        obj: Object to encode
        **kwargs: Additional arguments (indent, etc.)

    Returns:
        JSON string
    """
    indent = kwargs.get("indent", 0)

    # Use orjson for compact output (fastest)
    if indent == 0:
        try:
            return orjson.dumps(obj).decode("utf-8")
        except (TypeError, ValueError):
            # Fallback for edge cases (e.g., integers outside 64-bit range)
            pass

    # Use stdlib for pretty-printed output or as fallback (most compatible)
    return json.dumps(obj, indent=indent if indent > 0 else None, ensure_ascii=False)


def validate_json_size(data: str | bytes, max_size: int, name: str = "Document") -> None:
    """
    Validate document size before parsing.

    Args:
        data: JSON text to validate
        max_size: Maximum allowed size in bytes
        name: Name for error messages

    Raises:
        DecodeError: If size exceeds limit
    """
    size = len(data.encode("utf-8")) if isinstance(data, str) else len(data)
    if size > max_size:
        raise DecodeError(f"{name} size {size} bytes exceeds maximum {max_size} bytes")


def validate_json_depth(obj: Any, max_depth: int = 64, current_depth: int = 0) -> None:
    """
    Validate JSON nesting depth to prevent runaway recursion.

    Args:
        obj: Object to validate
        max_depth: Maximum allowed nesting depth
        current_depth: Current depth (internal)

    Raises:
        DecodeError: If depth exceeds limit
    """
    if current_depth > max_depth:
        raise DecodeError(f"JSON nesting depth {current_depth} exceeds maximum {max_depth}")

    if isinstance(obj, dict):
        for value in obj.values():
            validate_json_depth(value, max_depth, current_depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            validate_json_depth(item, max_depth, current_depth + 1)
