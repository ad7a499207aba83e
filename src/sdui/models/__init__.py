"""Wire data models: styles, actions, and the component tree."""

from .base import SduiModel
from .style import Style, Padding, Margin, EdgeInsets
from .actions import (
    Action,
    ACTION_TYPES,
    NavigateAction,
    ApiCallAction,
    ShowDialogAction,
    UpdateStateAction,
    ResetAction,
    CustomAction,
)
from .components import (
    Component,
    BaseComponent,
    COMPONENT_TYPES,
    CONTAINER_TYPES,
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

__all__ = [
    "SduiModel",
    # Style
    "Style",
    "Padding",
    "Margin",
    "EdgeInsets",
    # Actions
    "Action",
    "ACTION_TYPES",
    "NavigateAction",
    "ApiCallAction",
    "ShowDialogAction",
    "UpdateStateAction",
    "ResetAction",
    "CustomAction",
    # Components
    "Component",
    "BaseComponent",
    "COMPONENT_TYPES",
    "CONTAINER_TYPES",
    "TextComponent",
    "ButtonComponent",
    "ColumnComponent",
    "RowComponent",
    "ImageComponent",
    "TextFieldComponent",
    "SpacerComponent",
    "DividerComponent",
    "BoxComponent",
    "CardComponent",
    "ListComponent",
    "GridComponent",
    "SwitchComponent",
    "CheckboxComponent",
    "RadioButtonComponent",
    "ProgressBarComponent",
    "SliderComponent",
    "ChipComponent",
]
