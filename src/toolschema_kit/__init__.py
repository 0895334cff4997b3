# Editing
from .editing import ToolsSession

# Observability
from .observability import MetricsHook, NoOpMetricsHook

# Schema conversion
from .schema import (
    FormatError,
    FunctionDef,
    ImportCheck,
    ItemsDef,
    JSONFormatConfig,
    ParameterDef,
    PropertyDef,
    ToolFormat,
    ToolImportError,
    UnknownFormatError,
    build_property_schema,
    build_tools_document,
    detect_format,
    format_json,
    parse_property_schema,
    parse_tools_document,
    validate_import,
)

# Validation
from .validation import (
    IssueKind,
    ValidationIssue,
    ValidationResult,
    validate_function_name,
    validate_schema,
)

__all__ = [
    # Editing
    "ToolsSession",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    # Schema conversion
    "FormatError",
    "FunctionDef",
    "ImportCheck",
    "ItemsDef",
    "JSONFormatConfig",
    "ParameterDef",
    "PropertyDef",
    "ToolFormat",
    "ToolImportError",
    "UnknownFormatError",
    "build_property_schema",
    "build_tools_document",
    "detect_format",
    "format_json",
    "parse_property_schema",
    "parse_tools_document",
    "validate_import",
    # Validation
    "IssueKind",
    "ValidationIssue",
    "ValidationResult",
    "validate_function_name",
    "validate_schema",
]
