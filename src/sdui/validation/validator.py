"""Component Validator.

Walks a decoded tree depth-first and reports issues as data. A node's own
issues come first, then each child's issues in order, prefixed with the
child's position so a flat list stays traceable.
"""

from functools import lru_cache
from typing import Any, Callable, Iterable

from ..core import get_logger
from ..models import (
    ApiCallAction,
    BaseComponent,
    BoxComponent,
    ButtonComponent,
    CardComponent,
    ChipComponent,
    ColumnComponent,
    CustomAction,
    DividerComponent,
    GridComponent,
    ImageComponent,
    ListComponent,
    NavigateAction,
    ProgressBarComponent,
    RadioButtonComponent,
    RowComponent,
    ShowDialogAction,
    SliderComponent,
    SpacerComponent,
    Style,
    TextComponent,
    TextFieldComponent,
    UpdateStateAction,
)
from ..models.style import COLOR_FIELDS, DIMENSION_FIELDS, EdgeInsets
from ..monitoring import MetricsCollector, metrics_collector
from ..styling import is_valid_color, is_valid_dimension
from .issues import Severity, ValidationIssue, ValidationReport

logger = get_logger(__name__)


FONT_WEIGHTS = frozenset(
    {"normal", "bold", "light", "medium", "thin", "ultralight", "semibold", "extrabold", "black"}
)
ALIGNMENTS = frozenset({"start", "left", "center", "end", "right", "top", "bottom"})
FLEX_DIRECTIONS = frozenset({"row", "column", "row-reverse", "column-reverse"})
JUSTIFY_CONTENT = frozenset(
    {
        "start",
        "end",
        "center",
        "space-between",
        "space-around",
        "space-evenly",
        "flex-start",
        "flex-end",
    }
)
ALIGN_ITEMS = frozenset({"start", "end", "center", "stretch", "baseline", "flex-start", "flex-end"})
TEXT_OVERFLOW = frozenset({"clip", "ellipsis", "visible"})
KEYBOARD_TYPES = frozenset({"text", "number", "email", "phone", "password", "uri", "decimal"})
HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})
DIALOG_TYPES = frozenset({"info", "warning", "error", "success"})
IMAGE_SCHEMES = ("http://", "https://", "data:")

# (attribute, wire name, allowed keywords)
_STYLE_ENUMS: tuple[tuple[str, str, frozenset[str]], ...] = (
    ("font_weight", "fontWeight", FONT_WEIGHTS),
    ("alignment", "alignment", ALIGNMENTS),
    ("flex_direction", "flexDirection", FLEX_DIRECTIONS),
    ("justify_content", "justifyContent", JUSTIFY_CONTENT),
    ("align_items", "alignItems", ALIGN_ITEMS),
)

# (attribute, wire name, minimum, strictly greater)
_STYLE_LOWER_BOUNDS: tuple[tuple[str, str, float, bool], ...] = (
    ("font_size", "fontSize", 0.0, True),
    ("corner_radius", "cornerRadius", 0.0, False),
    ("border_width", "borderWidth", 0.0, False),
    ("shadow_radius", "shadowRadius", 0.0, False),
    ("scale", "scale", 0.0, True),
    ("flex", "flex", 0.0, False),
    ("z_index", "zIndex", 0.0, False),
)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class _Collector:
    """Accumulates issues for a single node."""

    def __init__(self, component_id: str | None) -> None:
        self.component_id = component_id
        self.issues: list[ValidationIssue] = []

    def add(
        self,
        severity: Severity,
        message: str,
        field: str | None = None,
        value: Any = None,
        suggestion: str | None = None,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                message=message,
                component_id=self.component_id,
                field=field,
                value=value,
                severity=severity,
                suggestion=suggestion,
            )
        )

    def error(self, message: str, **kwargs: Any) -> None:
        self.add(Severity.ERROR, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.add(Severity.WARNING, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self.add(Severity.INFO, message, **kwargs)


class ComponentValidator:
    """
    Recursive validator for component trees.

    ``validate`` never raises: a rule that fails unexpectedly is reported as
    an Error on the node being checked.
    """

    def __init__(self, metrics: MetricsCollector | None = None) -> None:
        self.metrics = metrics or metrics_collector
        self._rules: dict[type[BaseComponent], Callable[[Any, _Collector], None]] = {
            TextComponent: self._check_text,
            ButtonComponent: self._check_button,
            ChipComponent: self._check_chip,
            ImageComponent: self._check_image,
            TextFieldComponent: self._check_text_field,
            SpacerComponent: self._check_spacer,
            DividerComponent: self._check_divider,
            RadioButtonComponent: self._check_radio_button,
            ProgressBarComponent: self._check_progress_bar,
            SliderComponent: self._check_slider,
            ColumnComponent: self._check_container,
            RowComponent: self._check_container,
            BoxComponent: self._check_container,
            CardComponent: self._check_container,
            ListComponent: self._check_container,
            GridComponent: self._check_grid,
        }

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def validate(self, node: BaseComponent) -> list[ValidationIssue]:
        """Validate a tree and return its issues in traversal order."""
        issues = self._walk(node)
        for issue in issues:
            self.metrics.record_validation_issue(issue.severity.value)
        if issues:
            logger.debug(
                "validation_complete",
                component_id=node.id,
                issues=len(issues),
                errors=sum(1 for i in issues if i.severity is Severity.ERROR),
            )
        return issues

    def validate_all(self, nodes: Iterable[BaseComponent]) -> list[ValidationIssue]:
        """Validate several roots; results are concatenated in input order."""
        issues: list[ValidationIssue] = []
        for node in nodes:
            issues.extend(self.validate(node))
        return issues

    def report(self, node: BaseComponent) -> ValidationReport:
        return ValidationReport(tuple(self.validate(node)))

    def is_valid(self, node: BaseComponent) -> bool:
        return self.report(node).is_valid

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _walk(self, node: BaseComponent) -> list[ValidationIssue]:
        out = _Collector(node.id)
        try:
            self._check_common(node, out)
            rule = self._rules.get(type(node))
            if rule is not None:
                rule(node, out)
            if node.action is not None:
                self._check_action(node.action, out)
        except Exception as e:
            logger.error(
                "validation_rule_failed",
                component_id=node.id,
                type=node.tag,
                error=str(e),
                exc_info=True,
            )
            out.error(f"Validation failed unexpectedly: {e}")

        issues = out.issues
        if node.CHILD_FIELD is not None:
            label = "Child" if node.CHILD_FIELD == "children" else "Item"
            for index, child in enumerate(node.child_nodes):
                segment = f"{node.CHILD_FIELD}[{index}]"
                prefix = f"{label}[{index}]: "
                issues.extend(issue.nested(segment, prefix) for issue in self._walk(child))
        return issues

    # ------------------------------------------------------------------
    # Common fields
    # ------------------------------------------------------------------

    def _check_common(self, node: BaseComponent, out: _Collector) -> None:
        if not node.id.strip():
            out.warning(
                "Component has empty ID",
                field="id",
                value=node.id,
                suggestion="Consider adding a meaningful ID for better debugging",
            )
        if node.style is not None:
            self._check_style(node.style, out)

    def _check_style(self, style: Style, out: _Collector) -> None:
        for attr in DIMENSION_FIELDS:
            value = getattr(style, attr)
            if value is not None and not is_valid_dimension(value):
                name = _camel(attr)
                out.error(
                    f"Style {name} must be a valid dimension",
                    field=f"style.{name}",
                    value=value,
                    suggestion="Use a value like '100%', '50%', '16dp' or '16'",
                )

        for attr in COLOR_FIELDS:
            value = getattr(style, attr)
            if value is not None and not is_valid_color(value):
                name = _camel(attr)
                out.error(
                    f"Style {name} must be a valid color",
                    field=f"style.{name}",
                    value=value,
                    suggestion="Use hex format: #RGB, #RRGGBB or #AARRGGBB",
                )

        for attr, name, allowed in _STYLE_ENUMS:
            value = getattr(style, attr)
            if value is not None and value.strip().lower() not in allowed:
                out.error(
                    f"Style {name} must be one of: {', '.join(sorted(allowed))}",
                    field=f"style.{name}",
                    value=value,
                )

        for attr, name, minimum, strict in _STYLE_LOWER_BOUNDS:
            value = getattr(style, attr)
            if value is None:
                continue
            if strict and value <= minimum:
                out.error(f"Style {name} must be positive", field=f"style.{name}", value=value)
            elif not strict and value < minimum:
                out.error(f"Style {name} must not be negative", field=f"style.{name}", value=value)

        if style.opacity is not None and not 0.0 <= style.opacity <= 1.0:
            out.error(
                "Style opacity must be between 0 and 1",
                field="style.opacity",
                value=style.opacity,
            )

        if style.rotation is not None and not -360.0 <= style.rotation <= 360.0:
            out.warning(
                "Style rotation is outside -360..360 degrees",
                field="style.rotation",
                value=style.rotation,
            )

        for attr in ("shadow_offset_x", "shadow_offset_y"):
            value = getattr(style, attr)
            if value is not None and not -100.0 <= value <= 100.0:
                name = _camel(attr)
                out.warning(
                    f"Style {name} is outside -100..100",
                    field=f"style.{name}",
                    value=value,
                )

        self._check_insets("padding", style.padding, out)
        self._check_insets("margin", style.margin, out)

    def _check_insets(self, name: str, insets: EdgeInsets | None, out: _Collector) -> None:
        if insets is None:
            return
        for edge, value in insets.values().items():
            if value < 0:
                out.error(
                    f"Style {name}.{edge} must not be negative",
                    field=f"style.{name}.{edge}",
                    value=value,
                )

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _check_action(self, action: Any, out: _Collector) -> None:
        if isinstance(action, ApiCallAction):
            if _blank(action.url):
                out.error("API call action must have a URL", field="action.url", value=action.url)
            if action.method.upper() not in HTTP_METHODS:
                out.warning(
                    f"API call method '{action.method}' is not a standard HTTP method",
                    field="action.method",
                    value=action.method,
                )
            for attr in ("on_success", "on_error"):
                chained = getattr(action, attr)
                if chained is not None and ":" not in chained:
                    name = _camel(attr)
                    out.warning(
                        f"Action {name} is not in 'verb:payload' form and will be ignored",
                        field=f"action.{name}",
                        value=chained,
                        suggestion="Use e.g. 'navigate:home' or 'update_state:key=value'",
                    )

        elif isinstance(action, UpdateStateAction):
            if _blank(action.key):
                out.error("Update state action must have a key", field="action.key", value=action.key)

        elif isinstance(action, CustomAction):
            if _blank(action.action):
                out.error(
                    "Custom action must have a name",
                    field="action.action",
                    value=action.action,
                )

        elif isinstance(action, ShowDialogAction):
            if action.dialog_type.lower() not in DIALOG_TYPES:
                out.warning(
                    f"Dialog type '{action.dialog_type}' is not recognized",
                    field="action.dialogType",
                    value=action.dialog_type,
                    suggestion=f"Use one of: {', '.join(sorted(DIALOG_TYPES))}",
                )

        elif isinstance(action, NavigateAction):
            has_payload_route = bool(action.payload and action.payload.get("route"))
            if _blank(action.route) and not has_payload_route:
                out.info(
                    "Navigate action has no route; the default route will be used",
                    field="action.route",
                )

    # ------------------------------------------------------------------
    # Variant rules
    # ------------------------------------------------------------------

    def _check_text(self, node: TextComponent, out: _Collector) -> None:
        if _blank(node.text):
            out.error(
                "Text component has empty text content",
                field="text",
                value=node.text,
                suggestion="Consider adding meaningful text or removing the component",
            )
        self._check_max_lines(node.max_lines, out)
        if node.text_overflow is not None and node.text_overflow.lower() not in TEXT_OVERFLOW:
            out.error(
                f"Text overflow must be one of: {', '.join(sorted(TEXT_OVERFLOW))}",
                field="textOverflow",
                value=node.text_overflow,
            )

    def _check_button(self, node: ButtonComponent, out: _Collector) -> None:
        if _blank(node.text):
            out.error("Button must have text content", field="text", value=node.text)

    def _check_chip(self, node: ChipComponent, out: _Collector) -> None:
        if _blank(node.text):
            out.error("Chip must have text content", field="text", value=node.text)

    def _check_image(self, node: ImageComponent, out: _Collector) -> None:
        if _blank(node.url):
            out.error("Image must have a URL", field="url", value=node.url)
        elif not node.url.strip().lower().startswith(IMAGE_SCHEMES):
            out.warning(
                "Image URL should use http(s) or a data: URI",
                field="url",
                value=node.url,
            )

    def _check_text_field(self, node: TextFieldComponent, out: _Collector) -> None:
        self._check_max_lines(node.max_lines, out)
        if node.keyboard_type is not None and node.keyboard_type.lower() not in KEYBOARD_TYPES:
            out.error(
                f"Keyboard type must be one of: {', '.join(sorted(KEYBOARD_TYPES))}",
                field="keyboardType",
                value=node.keyboard_type,
            )
        if node.is_password and node.value:
            out.error(
                "Password field must not carry a pre-filled value",
                field="value",
                suggestion="Remove the value from the document",
            )

    def _check_max_lines(self, max_lines: int | None, out: _Collector) -> None:
        if max_lines is not None and max_lines < 1:
            out.error("maxLines must be at least 1", field="maxLines", value=max_lines)

    def _check_spacer(self, node: SpacerComponent, out: _Collector) -> None:
        if node.width is None and node.height is None:
            out.warning(
                "Spacer has neither width nor height",
                field="width",
                suggestion="Set width or height so the spacer takes up room",
            )
        for name in ("width", "height"):
            value = getattr(node, name)
            if value is not None and value < 0:
                out.error(f"Spacer {name} must not be negative", field=name, value=value)

    def _check_divider(self, node: DividerComponent, out: _Collector) -> None:
        if node.thickness is not None and node.thickness <= 0:
            out.error("Divider thickness must be positive", field="thickness", value=node.thickness)
        if node.color is not None and not is_valid_color(node.color):
            out.error("Divider color must be a valid color", field="color", value=node.color)

    def _check_radio_button(self, node: RadioButtonComponent, out: _Collector) -> None:
        if _blank(node.group):
            out.warning(
                "RadioButton has no group",
                field="group",
                suggestion="Declare a group so only one option can be selected",
            )

    def _check_progress_bar(self, node: ProgressBarComponent, out: _Collector) -> None:
        if not 0.0 <= node.progress <= 1.0:
            out.error(
                "ProgressBar progress must be between 0 and 1",
                field="progress",
                value=node.progress,
            )

    def _check_slider(self, node: SliderComponent, out: _Collector) -> None:
        if node.min_value >= node.max_value:
            out.error(
                "Slider minValue must be less than maxValue",
                field="minValue",
                value=node.min_value,
            )
        elif not node.min_value <= node.value <= node.max_value:
            out.error(
                f"Slider value must be between minValue ({node.min_value:g}) "
                f"and maxValue ({node.max_value:g})",
                field="value",
                value=node.value,
            )
        if node.step is not None and node.step <= 0:
            out.error("Slider step must be positive", field="step", value=node.step)

    def _check_container(self, node: BaseComponent, out: _Collector) -> None:
        if not node.child_nodes:
            field = node.CHILD_FIELD
            noun = "children" if field == "children" else "items"
            out.warning(
                f"{node.tag} component has no {noun}",
                field=field,
                suggestion=f"Consider adding {noun} or removing the empty {node.tag.lower()}",
            )

    def _check_grid(self, node: GridComponent, out: _Collector) -> None:
        self._check_container(node, out)
        if node.columns <= 0:
            out.error("Grid columns must be positive", field="columns", value=node.columns)


@lru_cache
def default_validator() -> ComponentValidator:
    return ComponentValidator()


def validate(node: BaseComponent) -> list[ValidationIssue]:
    """Convenience function to validate one tree."""
    return default_validator().validate(node)


def validate_all(nodes: Iterable[BaseComponent]) -> list[ValidationIssue]:
    """Convenience function to validate several trees."""
    return default_validator().validate_all(nodes)


def is_valid(node: BaseComponent) -> bool:
    """True when the tree has no Error-severity issues."""
    return default_validator().is_valid(node)
