"""Component Tree Model.

One record type per UI primitive, joined into a tagged union on ``"type"``.
Containers own their children exclusively; trees are built bottom-up by the
codec and never mutated afterwards (UI-visible changes live in the state store).
"""

from typing import Annotated, Any, ClassVar, Literal, Union

from pydantic import Field, model_validator

from ..core.id import new_component_id
from .actions import Action
from .base import SduiModel
from .style import Style


class BaseComponent(SduiModel):
    """Fields shared by every node."""

    CHILD_FIELD: ClassVar[str | None] = None

    id: str
    style: Style | None = None
    action: Action | None = None
    visible: bool = True
    meta: dict[str, str] | None = None

    @model_validator(mode="before")
    @classmethod
    def _assign_id(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("id") is None:
            tag = cls.model_fields["type"].default
            data = {**data, "id": new_component_id(tag)}
        return data

    @property
    def tag(self) -> str:
        """Wire discriminator of this node."""
        return self.type  # type: ignore[attr-defined]

    @property
    def child_nodes(self) -> tuple["Component", ...]:
        """Owned children (``children`` or ``items``), empty for leaves."""
        if self.CHILD_FIELD is None:
            return ()
        return getattr(self, self.CHILD_FIELD)


# ============================================================================
# Leaves
# ============================================================================


class TextComponent(BaseComponent):
    type: Literal["Text"] = "Text"
    text: str
    max_lines: int | None = None
    text_overflow: str | None = None


class ButtonComponent(BaseComponent):
    type: Literal["Button"] = "Button"
    text: str
    enabled: bool = True
    loading: bool = False


class ImageComponent(BaseComponent):
    type: Literal["Image"] = "Image"
    url: str
    alt_text: str | None = None
    content_description: str | None = None
    placeholder: str | None = None
    error_placeholder: str | None = None


class TextFieldComponent(BaseComponent):
    type: Literal["TextField"] = "TextField"
    placeholder: str | None = None
    value: str | None = None
    enabled: bool = True
    keyboard_type: str | None = None
    max_lines: int | None = 1
    is_password: bool = False


class SpacerComponent(BaseComponent):
    type: Literal["Spacer"] = "Spacer"
    width: float | None = None
    height: float | None = None


class DividerComponent(BaseComponent):
    type: Literal["Divider"] = "Divider"
    color: str | None = None
    thickness: float | None = None


class SwitchComponent(BaseComponent):
    type: Literal["Switch"] = "Switch"
    checked: bool = False
    enabled: bool = True
    label: str | None = None


class CheckboxComponent(BaseComponent):
    type: Literal["Checkbox"] = "Checkbox"
    checked: bool = False
    enabled: bool = True
    label: str | None = None


class RadioButtonComponent(BaseComponent):
    type: Literal["RadioButton"] = "RadioButton"
    selected: bool = False
    enabled: bool = True
    label: str | None = None
    group: str | None = None


class ProgressBarComponent(BaseComponent):
    type: Literal["ProgressBar"] = "ProgressBar"
    progress: float = 0.0
    indeterminate: bool = False
    label: str | None = None


class SliderComponent(BaseComponent):
    type: Literal["Slider"] = "Slider"
    value: float = 0.0
    min_value: float = 0.0
    max_value: float = 100.0
    step: float | None = None
    enabled: bool = True
    label: str | None = None


class ChipComponent(BaseComponent):
    type: Literal["Chip"] = "Chip"
    text: str
    selected: bool = False
    enabled: bool = True
    icon: str | None = None


# ============================================================================
# Containers
# ============================================================================


class ColumnComponent(BaseComponent):
    CHILD_FIELD: ClassVar[str | None] = "children"

    type: Literal["Column"] = "Column"
    children: tuple["Component", ...] = ()
    spacing: float | None = None


class RowComponent(BaseComponent):
    CHILD_FIELD: ClassVar[str | None] = "children"

    type: Literal["Row"] = "Row"
    children: tuple["Component", ...] = ()
    spacing: float | None = None


class BoxComponent(BaseComponent):
    CHILD_FIELD: ClassVar[str | None] = "children"

    type: Literal["Box"] = "Box"
    children: tuple["Component", ...] = ()
    spacing: float | None = None


class CardComponent(BaseComponent):
    CHILD_FIELD: ClassVar[str | None] = "children"

    type: Literal["Card"] = "Card"
    children: tuple["Component", ...] = ()
    spacing: float | None = None
    elevation: float | None = None


class ListComponent(BaseComponent):
    CHILD_FIELD: ClassVar[str | None] = "items"

    type: Literal["List"] = "List"
    items: tuple["Component", ...] = ()
    item_spacing: float | None = None
    scrollable: bool = True
    show_scroll_indicator: bool = True


class GridComponent(BaseComponent):
    CHILD_FIELD: ClassVar[str | None] = "items"

    type: Literal["Grid"] = "Grid"
    items: tuple["Component", ...] = ()
    columns: int = 2
    item_spacing: float | None = None
    scrollable: bool = True


Component = Annotated[
    Union[
        TextComponent,
        ButtonComponent,
        ColumnComponent,
        RowComponent,
        ImageComponent,
        TextFieldComponent,
        SpacerComponent,
        DividerComponent,
        BoxComponent,
        CardComponent,
        ListComponent,
        GridComponent,
        SwitchComponent,
        CheckboxComponent,
        RadioButtonComponent,
        ProgressBarComponent,
        SliderComponent,
        ChipComponent,
    ],
    Field(discriminator="type"),
]

CONTAINER_TYPES: tuple[type[BaseComponent], ...] = (
    ColumnComponent,
    RowComponent,
    BoxComponent,
    CardComponent,
    ListComponent,
    GridComponent,
)

for _container in CONTAINER_TYPES:
    _container.model_rebuild()

COMPONENT_TYPES: dict[str, type[BaseComponent]] = {
    model.model_fields["type"].default: model
    for model in (
        TextComponent,
        ButtonComponent,
        ColumnComponent,
        RowComponent,
        ImageComponent,
        TextFieldComponent,
        SpacerComponent,
        DividerComponent,
        BoxComponent,
        CardComponent,
        ListComponent,
        GridComponent,
        SwitchComponent,
        CheckboxComponent,
        RadioButtonComponent,
        ProgressBarComponent,
        SliderComponent,
        ChipComponent,
    )
}
