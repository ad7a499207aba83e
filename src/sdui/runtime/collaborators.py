"""Collaborator contracts consumed by the dispatcher.

The dispatcher knows only these call shapes; hosts inject the
implementations.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Coroutine, Mapping, Protocol

from returns.result import Result


@dataclass(frozen=True)
class ApiResponse:
    """Result of a network call. Any status outside 200..299 is a failure."""

    status_code: int
    body: str | None = None
    headers: Mapping[str, str] | None = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    @classmethod
    def coerce(cls, value: Any) -> "ApiResponse":
        """Accept an ApiResponse or a ``{statusCode, body?, headers?}`` mapping."""
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            status = value.get("statusCode", value.get("status_code"))
            if status is None:
                raise ValueError("API response has no statusCode")
            body = value.get("body")
            headers = value.get("headers")
            return cls(
                status_code=int(status),
                body=None if body is None else str(body),
                headers=dict(headers) if headers is not None else None,
            )
        raise TypeError(f"Unsupported API response: {type(value).__name__}")


Navigator = Callable[[str, dict[str, str] | None], None]
DialogPresenter = Callable[[str, str, str], None]
ApiCaller = Callable[
    [str, str, dict[str, str] | None, dict[str, str] | None],
    Awaitable[ApiResponse | Mapping[str, Any]],
]
FormSubmitter = Callable[[dict[str, Any]], Awaitable[Result[None, Exception]]]
CustomHandler = Callable[[dict[str, str] | None], None]


class TaskScope(Protocol):
    """Anything that can own a fire-and-forget task (TaskGroup, event loop)."""

    def create_task(self, coro: Coroutine[Any, Any, Any]) -> Any: ...
