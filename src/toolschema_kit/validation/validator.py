# src/toolschema_kit/validation/validator.py

import json
import logging
import re
from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from time import monotonic

from toolschema_kit.observability import names
from toolschema_kit.observability.base import MetricsHook, NoOpMetricsHook
from toolschema_kit.schema.builder import build_tools_document
from toolschema_kit.schema.models import FunctionDef

logger = logging.getLogger(__name__)

_FUNCTION_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class IssueKind(str, Enum):
    DUPLICATE_FUNCTION_NAMES = "duplicate_function_names"
    MISSING_FUNCTION_NAME = "missing_function_name"
    INVALID_FUNCTION_NAME = "invalid_function_name"
    DUPLICATE_PARAMETER_KEYS = "duplicate_parameter_keys"
    MISSING_PARAMETER_KEY = "missing_parameter_key"
    JSON_GENERATION = "json_generation"


@dataclass(frozen=True)
class ValidationIssue:
    """One rule violation.

    Callers that highlight offending fields should use the structured
    attributes; ``message`` is for display only.
    """

    kind: IssueKind
    function_index: int | None = None  # 0-based
    function_name: str | None = None
    duplicates: tuple[str, ...] = ()
    detail: str = ""

    @property
    def subject(self) -> str:
        # Name-keyed once the function has a name, index-keyed before that
        if self.function_name:
            return f'Function "{self.function_name}"'
        if self.function_index is not None:
            return f"Function {self.function_index + 1}"
        return "Schema"

    @property
    def message(self) -> str:
        if self.kind is IssueKind.DUPLICATE_FUNCTION_NAMES:
            return f"Duplicate function names: {', '.join(self.duplicates)}"
        if self.kind is IssueKind.MISSING_FUNCTION_NAME:
            return f"{self.subject}: name is required"
        if self.kind is IssueKind.INVALID_FUNCTION_NAME:
            return (
                f"{self.subject}: invalid name (use snake_case: letters, numbers, "
                "underscores only, cannot start with number)"
            )
        if self.kind is IssueKind.DUPLICATE_PARAMETER_KEYS:
            keys = ", ".join(self.duplicates)
            return f"{self.subject}: duplicate parameter keys: {keys}"
        if self.kind is IssueKind.MISSING_PARAMETER_KEY:
            return f"{self.subject}: parameter missing key"
        return f"JSON generation error: {self.detail}"


@dataclass(frozen=True)
class ValidationResult:
    issues: tuple[ValidationIssue, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.issues

    @property
    def errors(self) -> list[str]:
        return [issue.message for issue in self.issues]


def validate_function_name(name: str) -> bool:
    """Return True if ``name`` is a valid identifier for a tool function."""
    return _FUNCTION_NAME.fullmatch(name) is not None


def _duplicates(values: Iterable[Hashable]) -> list:
    seen = set()
    duplicates = []
    for value in values:
        if value in seen and value not in duplicates:
            duplicates.append(value)
        seen.add(value)
    return duplicates


def _check_function(index: int, func: FunctionDef) -> list[ValidationIssue]:
    issues = []
    name = func.name or None

    if not func.name:
        issues.append(
            ValidationIssue(IssueKind.MISSING_FUNCTION_NAME, function_index=index)
        )
    elif not validate_function_name(func.name):
        issues.append(
            ValidationIssue(
                IssueKind.INVALID_FUNCTION_NAME,
                function_index=index,
                function_name=name,
            )
        )

    duplicate_keys = _duplicates(param.key for param in func.params if param.key)
    if duplicate_keys:
        issues.append(
            ValidationIssue(
                IssueKind.DUPLICATE_PARAMETER_KEYS,
                function_index=index,
                function_name=name,
                duplicates=tuple(duplicate_keys),
            )
        )

    for param in func.params:
        if not param.key:
            issues.append(
                ValidationIssue(
                    IssueKind.MISSING_PARAMETER_KEY,
                    function_index=index,
                    function_name=name,
                )
            )

    return issues


def validate_schema(
    functions: Sequence[FunctionDef],
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ValidationResult:
    """Check function definitions against the rules both providers enforce.

    Every violation is reported, in discovery order: duplicate function names
    first, then per-function checks in function order. A final pass builds
    and serializes the document so values that cannot be encoded as JSON are
    reported too.

    Args:
        functions: Function definitions to check.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        A ValidationResult; ``valid`` is False if any issue was found.
    """
    start = monotonic()
    issues: list[ValidationIssue] = []

    duplicate_names = _duplicates(func.name for func in functions if func.name)
    if duplicate_names:
        issues.append(
            ValidationIssue(
                IssueKind.DUPLICATE_FUNCTION_NAMES, duplicates=tuple(duplicate_names)
            )
        )

    for index, func in enumerate(functions):
        issues.extend(_check_function(index, func))

    try:
        json.dumps(build_tools_document(functions), allow_nan=False)
    except (TypeError, ValueError, RecursionError) as exc:
        issues.append(ValidationIssue(IssueKind.JSON_GENERATION, detail=str(exc)))

    elapsed_ms = 1000 * (monotonic() - start)
    metrics_hook.record_latency(names.SCHEMA_VALIDATION_DURATION, elapsed_ms)
    for issue in issues:
        metrics_hook.increment(
            names.SCHEMA_VALIDATION_ISSUES_TOTAL, labels={"kind": issue.kind.value}
        )

    logger.debug("Validated %d functions: %d issues", len(functions), len(issues))
    return ValidationResult(issues=tuple(issues))
