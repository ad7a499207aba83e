"""Action Models.

User-triggered intents, discriminated on the wire by ``"type"``.
"""

from typing import Annotated, Literal, Union

from pydantic import AliasChoices, Field

from .base import SduiModel


class NavigateAction(SduiModel):
    """Move the host to another route."""

    type: Literal["navigate"] = "navigate"
    route: str | None = None
    payload: dict[str, str] | None = Field(
        default=None, validation_alias=AliasChoices("payload", "arguments")
    )

    def resolved_route(self, default: str = "home") -> str:
        """Route from ``payload["route"]``, then ``route``, then ``default``."""
        if self.payload and self.payload.get("route"):
            return self.payload["route"]
        return self.route or default


class ApiCallAction(SduiModel):
    """Fire a network request; ``on_success``/``on_error`` are chained action strings."""

    type: Literal["api_call"] = "api_call"
    url: str
    method: str = "GET"
    headers: dict[str, str] | None = None
    body: dict[str, str] | None = None
    on_success: str | None = None
    on_error: str | None = None


class ShowDialogAction(SduiModel):
    """Show a dialog. The dialog kind travels as ``dialogType`` on the wire."""

    type: Literal["show_dialog"] = "show_dialog"
    title: str
    message: str
    dialog_type: str = Field(default="info", validation_alias=AliasChoices("dialogType", "kind"))


class UpdateStateAction(SduiModel):
    """Write a raw string into the state store (type-inferred)."""

    type: Literal["update_state"] = "update_state"
    key: str
    value: str


class ResetAction(SduiModel):
    """Clear the whole state store."""

    type: Literal["reset"] = "reset"
    payload: dict[str, str] | None = None


class CustomAction(SduiModel):
    """Route to a host-registered handler by name."""

    type: Literal["custom"] = "custom"
    action: str
    data: dict[str, str] | None = None


Action = Annotated[
    Union[
        NavigateAction,
        ApiCallAction,
        ShowDialogAction,
        UpdateStateAction,
        ResetAction,
        CustomAction,
    ],
    Field(discriminator="type"),
]

ACTION_TYPES: dict[str, type[SduiModel]] = {
    "navigate": NavigateAction,
    "api_call": ApiCallAction,
    "show_dialog": ShowDialogAction,
    "update_state": UpdateStateAction,
    "reset": ResetAction,
    "custom": CustomAction,
}
