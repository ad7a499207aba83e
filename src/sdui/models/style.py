"""Style records.

A flat set of independently optional properties. Absence means the host
toolkit default applies; nothing here is resolved into units or colors (see
``sdui.styling``).
"""

from typing import Any

from pydantic import field_validator

from .base import SduiModel


class EdgeInsets(SduiModel):
    """Per-edge spacing; the most specific value wins when resolved."""

    top: float | None = None
    bottom: float | None = None
    start: float | None = None
    end: float | None = None
    horizontal: float | None = None
    vertical: float | None = None
    all: float | None = None

    def values(self) -> dict[str, float]:
        """Set edges only, keyed by wire name."""
        return self.model_dump(exclude_none=True)


class Padding(EdgeInsets):
    """Inner spacing."""


class Margin(EdgeInsets):
    """Outer spacing."""


class Style(SduiModel):
    """Sparse style description attached to a node."""

    # Box spacing
    padding: Padding | None = None
    margin: Margin | None = None

    # Sizing (dimension strings: "100%", "50%", "24dp", "24")
    width: str | None = None
    height: str | None = None
    min_width: str | None = None
    min_height: str | None = None
    max_width: str | None = None
    max_height: str | None = None
    aspect_ratio: str | None = None
    scroll: bool | None = None

    # Color (hex strings)
    background_color: str | None = None
    text_color: str | None = None
    border_color: str | None = None
    shadow_color: str | None = None

    # Typography
    font_size: float | None = None
    font_weight: str | None = None
    alignment: str | None = None

    # Flex
    flex: float | None = None
    flex_direction: str | None = None
    justify_content: str | None = None
    align_items: str | None = None

    # Decoration
    corner_radius: float | None = None
    border_width: float | None = None
    shadow_radius: float | None = None
    shadow_offset_x: float | None = None
    shadow_offset_y: float | None = None
    opacity: float | None = None
    rotation: float | None = None
    scale: float | None = None
    z_index: int | None = None

    @field_validator("aspect_ratio", mode="before")
    @classmethod
    def _lenient_aspect_ratio(cls, value: Any) -> Any:
        # Anything other than a string or number is dropped rather than rejected
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            return None
        return value


DIMENSION_FIELDS = ("width", "height", "min_width", "min_height", "max_width", "max_height")
COLOR_FIELDS = ("background_color", "text_color", "border_color", "shadow_color")
