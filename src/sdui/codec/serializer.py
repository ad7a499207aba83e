"""SDUI Codec - JSON to component tree and back."""

import time
from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter, ValidationError
from returns.result import Failure, Result, Success

from ..core import (
    DecodeError,
    LRUCache,
    Settings,
    get_logger,
    get_settings,
    parse_json,
    safe_json_dumps,
    validate_json_depth,
    validate_json_size,
)
from ..models import ACTION_TYPES, BaseComponent, COMPONENT_TYPES, Component
from ..monitoring import MetricsCollector, metrics_collector

logger = get_logger(__name__)

_COMPONENT = TypeAdapter(Component)
_COMPONENT_LIST = TypeAdapter(list[Component])


def _format_location(loc: tuple[Any, ...]) -> str:
    parts: list[str] = []
    for part in loc:
        if isinstance(part, int):
            parts.append(f"[{part}]")
        elif part in COMPONENT_TYPES or part in ACTION_TYPES:
            # Union branch names add nothing for a reader
            continue
        else:
            parts.append(f".{part}" if parts else str(part))
    return "".join(parts) or "<root>"


def _describe(error: dict[str, Any]) -> str:
    location = _format_location(tuple(error.get("loc", ())))
    kind = error.get("type")

    if kind == "union_tag_invalid":
        tag = error.get("ctx", {}).get("tag")
        return f"{location}: unrecognized type tag {tag!r}"
    if kind == "union_tag_not_found":
        return f"{location}: missing required 'type' discriminator"
    if kind == "missing":
        return f"{location}: required field missing"
    return f"{location}: {error.get('msg')}"


def _structural_error(exc: ValidationError) -> DecodeError:
    lines = [_describe(err) for err in exc.errors()]
    return DecodeError(
        f"Invalid component document: {lines[0]}",
        details="\n".join(lines),
        original=exc,
    )


class SduiCodec:
    """
    Bidirectional mapping between wire JSON and the component tree.

    Decoding is tolerant (unknown keys ignored, defaults filled, safe coercion)
    but strict about the ``type`` tag. Decoded trees are immutable, so
    identical documents may share one cached tree.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.metrics = metrics or metrics_collector
        self._cache: LRUCache[Component] | None = None
        if self.settings.enable_cache:
            self._cache = LRUCache(
                max_size=self.settings.cache_size,
                ttl_seconds=self.settings.cache_ttl,
            )

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _load(self, text: str | bytes) -> Any:
        validate_json_size(text, self.settings.max_document_size)
        data = parse_json(text, repair=self.settings.repair_json)
        validate_json_depth(data, self.settings.max_json_depth)
        return data

    def _timed(self, fn, text: str | bytes):
        start = time.time()
        try:
            result = fn(text)
        except DecodeError as e:
            self.metrics.record_decode("error", time.time() - start)
            logger.warning("decode_failed", error=e.message, line=e.line, column=e.column)
            raise
        self.metrics.record_decode("success", time.time() - start)
        return result

    def _decode_one(self, text: str | bytes) -> Component:
        data = self._load(text)
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object, got {type(data).__name__}")
        try:
            return _COMPONENT.validate_python(data)
        except ValidationError as e:
            raise _structural_error(e) from e

    def _decode_list(self, text: str | bytes) -> list[Component]:
        data = self._load(text)
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise DecodeError(f"Expected a JSON array, got {type(data).__name__}")
        try:
            return _COMPONENT_LIST.validate_python(data)
        except ValidationError as e:
            raise _structural_error(e) from e

    def decode(self, text: str | bytes) -> Component:
        """
        Decode one component document.

        Args:
            text: UTF-8 JSON document with a root object

        Returns:
            Component tree

        Raises:
            DecodeError: If the document is malformed or structurally invalid
        """
        key = text.decode("utf-8", errors="replace") if isinstance(text, bytes) else text
        if self._cache is not None:
            cached = self._cache.get(key)
            if cached is not None:
                logger.debug("cache_hit", type=cached.type)
                return cached

        node = self._timed(self._decode_one, text)
        if self._cache is not None:
            self._cache.set(key, node)
        return node

    def decode_many(self, text: str | bytes) -> list[Component]:
        """Decode a JSON array of nodes (a single object is accepted as a one-element list)."""
        return self._timed(self._decode_list, text)

    def decode_result(self, text: str | bytes) -> Result[Component, DecodeError]:
        """Decode without raising (Result pattern version)."""
        try:
            return Success(self.decode(text))
        except DecodeError as e:
            return Failure(e)

    def decode_with_validation(self, text: str | bytes) -> Result[Component, DecodeError]:
        """
        Decode and gate on validation.

        Returns:
            Success with the tree, or Failure when decoding fails or the
            validator reports any Error-severity issue (one issue per line
            in ``details``)
        """
        from ..validation import ComponentValidator

        result = self.decode_result(text)
        if not isinstance(result, Success):
            return result

        node = result.unwrap()
        report = ComponentValidator(metrics=self.metrics).report(node)
        if report.is_valid:
            return result

        return Failure(
            DecodeError(
                "Validation failed",
                details="\n".join(issue.message for issue in report.errors),
            )
        )

    # ------------------------------------------------------------------
    # Encoding
    # ------------------------------------------------------------------

    def encode(self, node: BaseComponent, indent: int = 0) -> str:
        """Encode a node to JSON (nulls omitted, camelCase keys)."""
        return safe_json_dumps(node.to_wire(), indent=indent)

    def encode_many(self, nodes: list[BaseComponent], indent: int = 0) -> str:
        """Encode a list of nodes to a JSON array."""
        return safe_json_dumps([node.to_wire() for node in nodes], indent=indent)

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear()


@lru_cache
def default_codec() -> SduiCodec:
    """Shared codec built from environment settings."""
    return SduiCodec()


def decode(text: str | bytes) -> Component:
    """Convenience function to decode one document with the default codec."""
    return default_codec().decode(text)


def decode_many(text: str | bytes) -> list[Component]:
    """Convenience function to decode a node array with the default codec."""
    return default_codec().decode_many(text)


def encode(node: BaseComponent, indent: int = 0) -> str:
    """Convenience function to encode a node with the default codec."""
    return default_codec().encode(node, indent=indent)
