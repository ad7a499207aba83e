"""Style resolution for host toolkits."""

from .resolver import (
    resolve,
    ResolvedStyle,
    EMPTY_STYLE,
    Dimension,
    DimensionKind,
    Color,
    BLACK,
    Insets,
    HorizontalAlignment,
    VerticalAlignment,
    Arrangement,
    CrossAlignment,
    FlexDirection,
    FONT_WEIGHTS,
    parse_dimension,
    parse_color,
    parse_aspect_ratio,
    parse_arrangement,
    parse_cross_alignment,
    parse_flex_direction,
    parse_font_weight,
    parse_horizontal_alignment,
    parse_vertical_alignment,
    resolve_insets,
    is_valid_dimension,
    is_valid_color,
)

__all__ = [
    "resolve",
    "ResolvedStyle",
    "EMPTY_STYLE",
    "Dimension",
    "DimensionKind",
    "Color",
    "BLACK",
    "Insets",
    "HorizontalAlignment",
    "VerticalAlignment",
    "Arrangement",
    "CrossAlignment",
    "FlexDirection",
    "FONT_WEIGHTS",
    "parse_dimension",
    "parse_color",
    "parse_aspect_ratio",
    "parse_arrangement",
    "parse_cross_alignment",
    "parse_flex_direction",
    "parse_font_weight",
    "parse_horizontal_alignment",
    "parse_vertical_alignment",
    "resolve_insets",
    "is_valid_dimension",
    "is_valid_color",
]
