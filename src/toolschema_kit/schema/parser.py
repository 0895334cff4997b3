# schema/parser.py

"""Parse OpenAI or Claude tool documents back into the editable model.

The dialect is detected from the first entry. Any malformed entry aborts the
whole import; callers keep their previous state.
"""

import copy
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from time import monotonic
from typing import Any, TypeVar

from pydantic import ValidationError

from toolschema_kit.observability import names
from toolschema_kit.observability.base import MetricsHook, NoOpMetricsHook

from .errors import FormatError, ToolImportError, UnknownFormatError
from .formats import ToolFormat, detect_format
from .models import ITEM_TYPES, FunctionDef, ParameterDef, PropertyDef

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=PropertyDef)

# Copied verbatim whatever the declared type.
_PASSTHROUGH_FIELDS = (
    "enum",
    "default",
    "minimum",
    "maximum",
    "minLength",
    "maxLength",
)


@dataclass(frozen=True)
class ImportCheck:
    valid: bool
    error: str | None = None


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def _required_keys(schema: Mapping[str, Any]) -> list[Any]:
    required = schema.get("required")
    return list(required) if isinstance(required, list) else []


def _copy_fields(key: str, fragment: Any, required: bool) -> dict[str, Any]:
    if not isinstance(fragment, Mapping):
        raise FormatError(f'Property "{key}": schema must be an object')

    fields: dict[str, Any] = {
        "key": key,
        "type": fragment.get("type") or "string",
        "description": fragment.get("description") or "",
        "required": required,
    }

    for name in _PASSTHROUGH_FIELDS:
        if name in fragment:
            fields[name] = copy.deepcopy(fragment[name])

    if fragment.get("pattern"):
        fields["pattern"] = fragment["pattern"]

    if fields["type"] == "array":
        items = fragment.get("items")
        if isinstance(items, Mapping):
            item_type = items.get("type") or "string"
            if item_type not in ITEM_TYPES:
                logger.warning(
                    'Property "%s": unsupported items type %r, using "string"',
                    key,
                    item_type,
                )
                item_type = "string"
            fields["items"] = {"type": item_type}
        for name in ("minItems", "maxItems"):
            if name in fragment:
                fields[name] = fragment[name]

    return fields


def _to_model(model: type[M], key: str, fields: dict[str, Any]) -> M:
    try:
        return model.model_validate(fields)
    except ValidationError as exc:
        raise FormatError(f'Property "{key}": {_describe(exc)}') from exc


def parse_property_schema(
    key: str, fragment: Any, required: bool = False
) -> ParameterDef:
    """Convert one JSON Schema property fragment into a parameter.

    Constraint fields are copied even when they don't apply to the declared
    type. Object properties are read one level deep; anything nested below
    that is dropped.

    Raises:
        FormatError: If the fragment is not a mapping or holds values the
            model rejects (for example an unsupported ``type``).
    """
    fields = _copy_fields(key, fragment, required)

    properties = fragment.get("properties")
    if fields["type"] == "object" and isinstance(properties, Mapping):
        nested_required = _required_keys(fragment)
        fields["properties"] = {
            prop_key: _to_model(
                PropertyDef,
                prop_key,
                _copy_fields(prop_key, prop_schema, prop_key in nested_required),
            )
            for prop_key, prop_schema in properties.items()
        }

    return _to_model(ParameterDef, key, fields)


def _parse_params(schema: Any) -> list[ParameterDef]:
    if not isinstance(schema, Mapping):
        return []
    properties = schema.get("properties")
    if not isinstance(properties, Mapping):
        return []

    required = _required_keys(schema)
    return [
        parse_property_schema(key, fragment, key in required)
        for key, fragment in properties.items()
    ]


def _unpack_openai(index: int, tool: Any) -> tuple[Any, Any, Any]:
    if not isinstance(tool, Mapping) or tool.get("type") != "function":
        raise FormatError(f'Tool {index}: type must be "function"', index=index)

    function = tool.get("function")
    if not isinstance(function, Mapping):
        raise FormatError(f'Tool {index}: missing "function" property', index=index)

    return (
        function.get("name") or "",
        function.get("description") or "",
        function.get("parameters"),
    )


def _unpack_claude(index: int, tool: Any) -> tuple[Any, Any, Any]:
    if not isinstance(tool, Mapping) or not tool.get("name"):
        raise FormatError(f'Tool {index}: missing "name" property', index=index)

    return tool["name"], tool.get("description") or "", tool.get("input_schema")


def _parse_entries(tools: list[Any], fmt: ToolFormat) -> list[FunctionDef]:
    unpack = _unpack_openai if fmt is ToolFormat.OPENAI else _unpack_claude

    functions = []
    for index, tool in enumerate(tools):
        name, description, schema = unpack(index, tool)
        try:
            functions.append(
                FunctionDef(
                    name=name,
                    description=description,
                    params=_parse_params(schema),
                )
            )
        except FormatError as exc:
            raise FormatError(f"Tool {index}: {exc}", index=index) from exc
        except ValidationError as exc:
            raise FormatError(f"Tool {index}: {_describe(exc)}", index=index) from exc

    return functions


def _closest_format(tools: list[Any]) -> ToolFormat:
    """Dialect whose marker key the first entry carries, if any.

    Lets an incomplete first entry fail with an entry-level FormatError
    naming the missing field instead of an UnknownFormatError.
    """
    first = tools[0] if tools else None
    if not isinstance(first, Mapping):
        return ToolFormat.UNKNOWN
    if first.get("type") == "function" or "function" in first:
        return ToolFormat.OPENAI
    if "input_schema" in first:
        return ToolFormat.CLAUDE
    return ToolFormat.UNKNOWN


def _reject_constant(name: str) -> Any:
    raise FormatError(f"Invalid JSON: {name} is not a valid JSON value")


def _decode(raw: str | bytes | list[Any]) -> Any:
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            return json.loads(raw, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            raise FormatError(f"Invalid JSON: {exc}") from exc
    return raw


def parse_tools_document(
    raw: str | bytes | list[Any],
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[FunctionDef]:
    """Parse a tools document, auto-detecting the OpenAI or Claude dialect.

    Args:
        raw: JSON text, or an already-decoded list of tool entries.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        Freshly built function definitions, in document order.

    Raises:
        FormatError: If the JSON is invalid, the top level is not an array,
            or an entry is malformed (``index`` names the entry).
        UnknownFormatError: If the first entry matches neither dialect.
    """
    start = monotonic()
    try:
        tools = _decode(raw)
        if not isinstance(tools, list):
            raise FormatError("Tools must be an array")

        fmt = detect_format(tools)
        if fmt is ToolFormat.UNKNOWN:
            fmt = _closest_format(tools)
        if fmt is ToolFormat.UNKNOWN:
            raise UnknownFormatError(
                "Unknown tool format. Expected OpenAI or Claude/Anthropic format."
            )
        logger.debug("Detected %s format with %d tools", fmt.value, len(tools))

        functions = _parse_entries(tools, fmt)
    except ToolImportError as exc:
        logger.error("Tools import failed: %s", exc)
        metrics_hook.increment(
            names.SCHEMA_IMPORT_ERRORS_TOTAL, labels={"error": type(exc).__name__}
        )
        raise

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.SCHEMA_IMPORT_DURATION, elapsed_ms)
    metrics_hook.increment(names.SCHEMA_IMPORTS_TOTAL, labels={"format": fmt.value})
    return functions


def validate_import(raw: str | bytes | list[Any]) -> ImportCheck:
    """Check whether a document would import, without raising."""
    try:
        parse_tools_document(raw)
    except ToolImportError as exc:
        return ImportCheck(valid=False, error=str(exc))
    return ImportCheck(valid=True)
