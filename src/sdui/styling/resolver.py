"""Style Resolver.

Turns a sparse :class:`~sdui.models.Style` into toolkit-ready values. Every
function here is pure: no I/O, no shared state. Malformed input falls back
silently (black for colors, zero for dimensions); flagging it is the
validator's job.
"""

import re
from dataclasses import dataclass
from enum import Enum

from ..models.style import EdgeInsets, Style


HEX_COLOR = re.compile(r"#([0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})")
_NUMBER = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)")


# ============================================================================
# Resolved value types
# ============================================================================


class DimensionKind(str, Enum):
    """How a dimension is applied along its axis."""

    FILL = "fill"  # "100%"
    FRACTION = "fraction"  # "<n>%", value in 0..1
    DP = "dp"  # "<n>dp" or bare number


@dataclass(frozen=True)
class Dimension:
    kind: DimensionKind
    value: float

    @classmethod
    def dp(cls, value: float) -> "Dimension":
        return cls(DimensionKind.DP, value)


@dataclass(frozen=True)
class Color:
    """RGBA color with channels in 0..1."""

    red: float
    green: float
    blue: float
    alpha: float = 1.0

    def to_hex(self) -> str:
        channels = (self.alpha, self.red, self.green, self.blue)
        return "#" + "".join(f"{round(c * 255):02X}" for c in channels)


BLACK = Color(0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Insets:
    """Resolved per-edge spacing in dp."""

    start: float = 0.0
    end: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


class HorizontalAlignment(str, Enum):
    START = "start"
    CENTER = "center"
    END = "end"


class VerticalAlignment(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


class Arrangement(str, Enum):
    """Main-axis distribution (justifyContent)."""

    START = "start"
    END = "end"
    CENTER = "center"
    SPACE_BETWEEN = "space-between"
    SPACE_AROUND = "space-around"
    SPACE_EVENLY = "space-evenly"


class CrossAlignment(str, Enum):
    """Cross-axis alignment (alignItems)."""

    START = "start"
    END = "end"
    CENTER = "center"
    STRETCH = "stretch"
    BASELINE = "baseline"


class FlexDirection(str, Enum):
    ROW = "row"
    COLUMN = "column"
    ROW_REVERSE = "row-reverse"
    COLUMN_REVERSE = "column-reverse"


FONT_WEIGHTS: dict[str, int] = {
    "thin": 100,
    "ultralight": 200,
    "light": 300,
    "normal": 400,
    "medium": 500,
    "semibold": 600,
    "bold": 700,
    "extrabold": 800,
    "black": 900,
}


@dataclass(frozen=True)
class ResolvedStyle:
    """Fully parsed style; ``None`` means the host default applies."""

    padding: Insets | None = None
    margin: Insets | None = None
    width: Dimension | None = None
    height: Dimension | None = None
    min_width: Dimension | None = None
    min_height: Dimension | None = None
    max_width: Dimension | None = None
    max_height: Dimension | None = None
    aspect_ratio: float | None = None
    scroll: bool | None = None
    background_color: Color | None = None
    text_color: Color | None = None
    border_color: Color | None = None
    shadow_color: Color | None = None
    font_size: float | None = None
    font_weight: int | None = None
    horizontal_alignment: HorizontalAlignment | None = None
    vertical_alignment: VerticalAlignment | None = None
    flex: float | None = None
    flex_direction: FlexDirection | None = None
    justify_content: Arrangement | None = None
    align_items: CrossAlignment | None = None
    corner_radius: float | None = None
    border_width: float | None = None
    shadow_radius: float | None = None
    shadow_offset_x: float | None = None
    shadow_offset_y: float | None = None
    opacity: float | None = None
    rotation: float | None = None
    scale: float | None = None
    z_index: int | None = None


EMPTY_STYLE = ResolvedStyle()


# ============================================================================
# Parsers
# ============================================================================


def _to_float(text: str) -> float | None:
    text = text.strip()
    return float(text) if _NUMBER.fullmatch(text) else None


def parse_dimension(value: str) -> Dimension:
    """
    Parse a dimension string.

    ``"100%"`` fills the axis, ``"<n>%"`` is a fraction clamped to 0..1,
    ``"<n>dp"`` and bare numbers are dp. Anything else resolves to 0dp.
    """
    text = value.strip().lower()

    if text == "100%":
        return Dimension(DimensionKind.FILL, 1.0)

    if text.endswith("%"):
        percent = _to_float(text[:-1])
        if percent is None:
            return Dimension.dp(0.0)
        return Dimension(DimensionKind.FRACTION, min(max(percent, 0.0), 100.0) / 100.0)

    if text.endswith("dp"):
        text = text[:-2]

    number = _to_float(text)
    return Dimension.dp(number if number is not None else 0.0)


def is_valid_dimension(value: str) -> bool:
    """Strict form of the dimension grammar: non-negative, percentages within 0..100."""
    text = value.strip().lower()

    if text.endswith("%"):
        percent = _to_float(text[:-1])
        return percent is not None and 0.0 <= percent <= 100.0

    if text.endswith("dp"):
        text = text[:-2]

    number = _to_float(text)
    return number is not None and number >= 0.0


def is_valid_color(value: str) -> bool:
    """Hex grammar: ``#RGB``, ``#RRGGBB`` or ``#AARRGGBB``."""
    return HEX_COLOR.fullmatch(value) is not None


def parse_color(value: str) -> Color:
    """Parse a hex color; anything else is opaque black."""
    if not is_valid_color(value):
        return BLACK

    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 6:
        digits = "FF" + digits

    alpha, red, green, blue = (int(digits[i : i + 2], 16) / 255.0 for i in range(0, 8, 2))
    return Color(red=red, green=green, blue=blue, alpha=alpha)


def resolve_insets(insets: EdgeInsets) -> Insets:
    """Per edge: edge-specific > axis (horizontal/vertical) > all > 0."""

    def pick(*candidates: float | None) -> float:
        for candidate in candidates:
            if candidate is not None:
                return candidate
        return 0.0

    return Insets(
        start=pick(insets.start, insets.horizontal, insets.all),
        end=pick(insets.end, insets.horizontal, insets.all),
        top=pick(insets.top, insets.vertical, insets.all),
        bottom=pick(insets.bottom, insets.vertical, insets.all),
    )


def parse_horizontal_alignment(value: str | None) -> HorizontalAlignment:
    """start/left, center, end/right; unknown or missing centers."""
    keyword = (value or "").strip().lower()
    if keyword in ("start", "left"):
        return HorizontalAlignment.START
    if keyword in ("end", "right"):
        return HorizontalAlignment.END
    return HorizontalAlignment.CENTER


def parse_vertical_alignment(value: str | None) -> VerticalAlignment:
    """top, center, bottom; unknown or missing centers."""
    keyword = (value or "").strip().lower()
    if keyword == "top":
        return VerticalAlignment.TOP
    if keyword == "bottom":
        return VerticalAlignment.BOTTOM
    return VerticalAlignment.CENTER


def _normalize_flex_keyword(value: str) -> str:
    text = value.strip().lower()
    if text.startswith("flex-"):
        text = text[len("flex-") :]
    return text


def parse_arrangement(value: str | None) -> Arrangement | None:
    """justifyContent keyword; ``flex-start``/``flex-end`` are synonyms for start/end."""
    if value is None:
        return None
    try:
        return Arrangement(_normalize_flex_keyword(value))
    except ValueError:
        return None


def parse_cross_alignment(value: str | None) -> CrossAlignment | None:
    """alignItems keyword; ``flex-start``/``flex-end`` are synonyms for start/end."""
    if value is None:
        return None
    try:
        return CrossAlignment(_normalize_flex_keyword(value))
    except ValueError:
        return None


def parse_flex_direction(value: str | None) -> FlexDirection | None:
    if value is None:
        return None
    try:
        return FlexDirection(value.strip().lower())
    except ValueError:
        return None


def parse_font_weight(value: str | None) -> int | None:
    """Named weight to its numeric value; unknown names inherit."""
    if value is None:
        return None
    return FONT_WEIGHTS.get(value.strip().lower())


def parse_aspect_ratio(value: str | None) -> float | None:
    """``"16:9"``, ``"16/9"`` or ``"1.78"``; non-positive or unparseable gives ``None``."""
    if value is None:
        return None

    for separator in (":", "/"):
        if separator in value:
            left, _, right = value.partition(separator)
            width, height = _to_float(left), _to_float(right)
            if width is None or height is None or width <= 0 or height <= 0:
                return None
            return width / height

    ratio = _to_float(value)
    return ratio if ratio is not None and ratio > 0 else None


# ============================================================================
# Entry point
# ============================================================================


def resolve(style: Style | None) -> ResolvedStyle:
    """Resolve a sparse style into a :class:`ResolvedStyle`."""
    if style is None:
        return EMPTY_STYLE

    def dimension(value: str | None) -> Dimension | None:
        return parse_dimension(value) if value is not None else None

    def color(value: str | None) -> Color | None:
        return parse_color(value) if value is not None else None

    alignment = style.alignment
    return ResolvedStyle(
        padding=resolve_insets(style.padding) if style.padding else None,
        margin=resolve_insets(style.margin) if style.margin else None,
        width=dimension(style.width),
        height=dimension(style.height),
        min_width=dimension(style.min_width),
        min_height=dimension(style.min_height),
        max_width=dimension(style.max_width),
        max_height=dimension(style.max_height),
        aspect_ratio=parse_aspect_ratio(style.aspect_ratio),
        scroll=style.scroll,
        background_color=color(style.background_color),
        text_color=color(style.text_color),
        border_color=color(style.border_color),
        shadow_color=color(style.shadow_color),
        font_size=style.font_size,
        font_weight=parse_font_weight(style.font_weight),
        horizontal_alignment=parse_horizontal_alignment(alignment) if alignment else None,
        vertical_alignment=parse_vertical_alignment(alignment) if alignment else None,
        flex=style.flex,
        flex_direction=parse_flex_direction(style.flex_direction),
        justify_content=parse_arrangement(style.justify_content),
        align_items=parse_cross_alignment(style.align_items),
        corner_radius=style.corner_radius,
        border_width=style.border_width,
        shadow_radius=style.shadow_radius,
        shadow_offset_x=style.shadow_offset_x,
        shadow_offset_y=style.shadow_offset_y,
        opacity=style.opacity,
        rotation=style.rotation,
        scale=style.scale,
        z_index=style.z_index,
    )
