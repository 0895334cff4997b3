# schema/builder.py

"""Build OpenAI-format tool documents from the editable model.

Pure data transformation. Never raises on a well-typed model; optional
fields that do not apply to a parameter's type are left out.
"""

import copy
import json
import logging
import math
from collections.abc import Sequence
from typing import Any

from .config import JSONFormatConfig
from .models import FunctionDef, ParameterDef, PropertyDef

logger = logging.getLogger(__name__)

_ENUM_TYPES = ("string", "number", "integer")
_NUMERIC_TYPES = ("number", "integer")


def _to_number(value: Any) -> int | float | None:
    """Coerce a form value to a JSON number, or None if it isn't one."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        # Digit separators such as "1_000" are not numbers in form input
        if not text or "_" in text:
            return None
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _set_number(schema: dict[str, Any], name: str, value: Any) -> None:
    number = _to_number(value)
    if number is not None:
        schema[name] = number


def _build_fragment(param: PropertyDef) -> dict[str, Any]:
    schema: dict[str, Any] = {"type": param.type}

    if param.description:
        schema["description"] = param.description

    if param.enum and param.type in _ENUM_TYPES:
        schema["enum"] = copy.deepcopy(param.enum)

    if param.has_default and param.default != "":
        schema["default"] = copy.deepcopy(param.default)

    if param.type in _NUMERIC_TYPES:
        _set_number(schema, "minimum", param.minimum)
        _set_number(schema, "maximum", param.maximum)

    if param.type == "string":
        if param.pattern:
            schema["pattern"] = param.pattern
        _set_number(schema, "minLength", param.min_length)
        _set_number(schema, "maxLength", param.max_length)

    if param.type == "array":
        if param.items is not None:
            schema["items"] = {"type": param.items.type}
        _set_number(schema, "minItems", param.min_items)
        _set_number(schema, "maxItems", param.max_items)

    return schema


def build_property_schema(param: PropertyDef) -> dict[str, Any]:
    """Convert one parameter into a JSON Schema property fragment.

    Object parameters get their ``properties`` built one level deep, with a
    ``required`` list of the nested keys flagged as required. Nested entries
    never contribute ``properties`` of their own.

    Args:
        param: The parameter to convert.

    Returns:
        A fresh dict that shares no references with ``param``.
    """
    schema = _build_fragment(param)

    if (
        isinstance(param, ParameterDef)
        and param.type == "object"
        and param.properties is not None
    ):
        schema["properties"] = {
            key: _build_fragment(prop) for key, prop in param.properties.items()
        }
        required = [key for key, prop in param.properties.items() if prop.required]
        if required:
            schema["required"] = required

    return schema


def build_tools_document(functions: Sequence[FunctionDef]) -> list[dict[str, Any]]:
    """Convert function definitions to OpenAI function calling format.

    Does not validate. Run ``validate_schema`` before treating the result as
    ready for export.

    Args:
        functions: Function definitions, in display order.

    Returns:
        List of dicts in OpenAI's tool format.
    """
    document = []
    for func in functions:
        definition: dict[str, Any] = {"name": func.name}
        if func.description:
            definition["description"] = func.description

        if func.params:
            properties = {}
            required = []
            for param in func.params:
                properties[param.key] = build_property_schema(param)
                if param.required:
                    required.append(param.key)

            parameters: dict[str, Any] = {"type": "object", "properties": properties}
            if required:
                parameters["required"] = required
            definition["parameters"] = parameters

        document.append({"type": "function", "function": definition})

    logger.debug("Built tools document with %d functions", len(document))
    return document


def format_json(
    document: Any,
    config: JSONFormatConfig = JSONFormatConfig(),
) -> str:
    """Serialize a tools document for display or download.

    Raises:
        ValueError: If the document holds NaN or infinite numbers, which
            have no JSON encoding.
    """
    return json.dumps(
        document,
        indent=config.indent,
        ensure_ascii=config.ensure_ascii,
        allow_nan=False,
    )
