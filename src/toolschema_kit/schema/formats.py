# schema/formats.py

from collections.abc import Mapping
from enum import Enum
from typing import Any


class ToolFormat(str, Enum):
    """Provider dialect of a tools document."""

    OPENAI = "openai"
    CLAUDE = "claude"
    UNKNOWN = "unknown"


def detect_format(tools: Any) -> ToolFormat:
    """Classify a decoded tools document by its first entry.

    Mixed documents are not supported: later entries are checked against the
    dialect of the first one when they are parsed.
    """
    if not isinstance(tools, list) or not tools:
        return ToolFormat.UNKNOWN

    first = tools[0]
    if not isinstance(first, Mapping):
        return ToolFormat.UNKNOWN

    if first.get("type") == "function" and isinstance(first.get("function"), Mapping):
        return ToolFormat.OPENAI

    if first.get("name") and isinstance(first.get("input_schema"), Mapping):
        return ToolFormat.CLAUDE

    return ToolFormat.UNKNOWN
