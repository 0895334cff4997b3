# src/toolschema_kit/schema/__init__.py

"""Bidirectional conversion between tool definitions and provider schemas.

Export always produces the OpenAI dialect. Import accepts OpenAI or Claude
documents and detects which one it was given.

Example:
    >>> from toolschema_kit.schema import parse_tools_document, build_tools_document
    >>>
    >>> functions = parse_tools_document('[{"name": "ping", "input_schema": {}}]')
    >>> build_tools_document(functions)
    [{'type': 'function', 'function': {'name': 'ping'}}]
"""

from .builder import build_property_schema, build_tools_document, format_json
from .config import JSONFormatConfig
from .errors import FormatError, ToolImportError, UnknownFormatError
from .formats import ToolFormat, detect_format
from .models import FunctionDef, ItemsDef, ParameterDef, PropertyDef
from .parser import (
    ImportCheck,
    parse_property_schema,
    parse_tools_document,
    validate_import,
)

__all__ = [
    # Builder
    "build_property_schema",
    "build_tools_document",
    "format_json",
    # Parser
    "parse_property_schema",
    "parse_tools_document",
    "validate_import",
    "ImportCheck",
    # Detection
    "detect_format",
    "ToolFormat",
    # Config
    "JSONFormatConfig",
    # Errors
    "ToolImportError",
    "FormatError",
    "UnknownFormatError",
    # Types
    "FunctionDef",
    "ParameterDef",
    "PropertyDef",
    "ItemsDef",
]
