from .session import ToolsSession

__all__ = [
    "ToolsSession",
]
