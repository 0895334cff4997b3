# schema/models.py

"""Editable in-memory representation of tool definitions.

A ``ParameterDef`` is a top-level function parameter. Its ``properties``
hold ``PropertyDef`` values, which have no ``properties`` of their own:
objects nest exactly one level deep.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field

ParamType = Literal["string", "number", "integer", "boolean", "array", "object"]
ItemType = Literal["string", "number", "integer", "boolean"]

# Form inputs are text, so bounds may arrive as strings like "5" or "".
NumberLike = int | float | str

PARAM_TYPES: tuple[str, ...] = (
    "string",
    "number",
    "integer",
    "boolean",
    "array",
    "object",
)
ITEM_TYPES: tuple[str, ...] = ("string", "number", "integer", "boolean")


class ItemsDef(BaseModel):
    type: ItemType = "string"

    class Config:
        extra = "forbid"
        validate_assignment = True


class PropertyDef(BaseModel):
    """A parameter that cannot carry nested properties."""

    key: str = ""
    type: ParamType = "string"
    description: str = ""
    required: bool = False

    enum: list[Any] | None = None
    default: Any = None  # Only meaningful when "default" is in model_fields_set

    minimum: NumberLike | None = None
    maximum: NumberLike | None = None

    pattern: str | None = None
    min_length: NumberLike | None = Field(default=None, alias="minLength")
    max_length: NumberLike | None = Field(default=None, alias="maxLength")

    items: ItemsDef | None = None
    min_items: NumberLike | None = Field(default=None, alias="minItems")
    max_items: NumberLike | None = Field(default=None, alias="maxItems")

    class Config:
        extra = "forbid"
        validate_assignment = True
        populate_by_name = True

    @property
    def has_default(self) -> bool:
        return "default" in self.model_fields_set


class ParameterDef(PropertyDef):
    """A top-level function parameter."""

    properties: dict[str, PropertyDef] | None = None


class FunctionDef(BaseModel):
    name: str = ""
    description: str = ""
    params: list[ParameterDef] = Field(default_factory=list)

    class Config:
        extra = "forbid"
        validate_assignment = True
