from .validator import (
    IssueKind,
    ValidationIssue,
    ValidationResult,
    validate_function_name,
    validate_schema,
)

__all__ = [
    "IssueKind",
    "ValidationIssue",
    "ValidationResult",
    "validate_function_name",
    "validate_schema",
]
