"""Shared pydantic configuration for wire models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class SduiModel(BaseModel):
    """Base for every wire record.

    camelCase on the wire, snake_case in Python. Unknown keys are ignored,
    numbers are accepted where strings are expected, and explicit ``null``
    falls back to the field default.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data

    def to_wire(self) -> dict[str, Any]:
        """Dump to the JSON-ready wire shape (camelCase, no nulls)."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
