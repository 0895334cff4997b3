import logging
from collections.abc import Iterable
from typing import Any

from toolschema_kit.observability.base import MetricsHook, NoOpMetricsHook
from toolschema_kit.schema.builder import build_tools_document, format_json
from toolschema_kit.schema.config import JSONFormatConfig
from toolschema_kit.schema.models import FunctionDef, ParameterDef
from toolschema_kit.schema.parser import parse_tools_document
from toolschema_kit.validation.validator import ValidationResult, validate_schema

logger = logging.getLogger(__name__)


class ToolsSession:
    """The list of function definitions being edited.

    Positions identify functions and parameters. Edits are applied in place;
    stale constraint fields survive a type change and are filtered out when
    the document is built.
    """

    def __init__(
        self,
        functions: Iterable[FunctionDef] | None = None,
        config: JSONFormatConfig = JSONFormatConfig(),
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._functions: list[FunctionDef] = [
            func.model_copy(deep=True) for func in functions or ()
        ]
        self.config = config
        self.metrics_hook = metrics_hook

    @property
    def functions(self) -> list[FunctionDef]:
        # deep copies so callers can't mutate session state
        return [func.model_copy(deep=True) for func in self._functions]

    def __len__(self) -> int:
        return len(self._functions)

    def add_function(self) -> int:
        self._functions.append(FunctionDef())
        logger.debug("Added function at index %d", len(self._functions) - 1)
        return len(self._functions) - 1

    def delete_function(self, index: int) -> None:
        self._get_function(index)
        del self._functions[index]
        logger.debug("Deleted function at index %d", index)

    def duplicate_function(self, index: int) -> int:
        """Insert a deep copy of a function right after it.

        Returns:
            Index of the copy.
        """
        original = self._get_function(index)
        duplicate = original.model_copy(deep=True)
        if original.name:
            duplicate.name = f"{original.name}{self.config.copy_suffix}"
        self._functions.insert(index + 1, duplicate)
        logger.debug("Duplicated function %d as %r", index, duplicate.name)
        return index + 1

    def update_function(self, index: int, **fields: Any) -> None:
        func = self._get_function(index)
        for name, value in fields.items():
            setattr(func, name, value)

    def add_parameter(self, function_index: int) -> int:
        func = self._get_function(function_index)
        func.params.append(
            ParameterDef(key="", type="string", description="", required=False)
        )
        return len(func.params) - 1

    def update_parameter(
        self, function_index: int, param_index: int, **fields: Any
    ) -> None:
        param = self._get_parameter(function_index, param_index)
        for name, value in fields.items():
            setattr(param, name, value)

    def delete_parameter(self, function_index: int, param_index: int) -> None:
        self._get_parameter(function_index, param_index)
        del self._functions[function_index].params[param_index]

    def reset(self) -> None:
        self._functions = []
        logger.info("Session reset")

    def import_json(self, raw: str | bytes | list[Any]) -> int:
        """Replace all functions with those parsed from a tools document.

        On failure the error propagates and the current functions are kept.

        Returns:
            Number of functions imported.
        """
        functions = parse_tools_document(raw, metrics_hook=self.metrics_hook)
        self._functions = functions
        logger.info("Imported %d functions", len(functions))
        return len(functions)

    def build(self) -> list[dict[str, Any]]:
        return build_tools_document(self._functions)

    def to_json(self) -> str:
        return format_json(self.build(), self.config)

    def validate(self) -> ValidationResult:
        return validate_schema(self._functions, metrics_hook=self.metrics_hook)

    def _get_function(self, index: int) -> FunctionDef:
        if not 0 <= index < len(self._functions):
            logger.error("Function not found: %d", index)
            raise IndexError(f"Function {index} not found")
        return self._functions[index]

    def _get_parameter(self, function_index: int, param_index: int) -> ParameterDef:
        func = self._get_function(function_index)
        if not 0 <= param_index < len(func.params):
            logger.error(
                "Parameter not found: function=%d, param=%d",
                function_index,
                param_index,
            )
            raise IndexError(
                f"Parameter {param_index} of function {function_index} not found"
            )
        return func.params[param_index]
