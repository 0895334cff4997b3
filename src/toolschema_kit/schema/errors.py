# schema/errors.py


class ToolImportError(ValueError):
    """Raised when a tools document cannot be imported.

    ``index`` is the position of the offending entry, or ``None`` when the
    problem is with the document as a whole.
    """

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class FormatError(ToolImportError):
    """Malformed document or a tool entry missing a required field."""


class UnknownFormatError(ToolImportError):
    """Document matches neither the OpenAI nor the Claude dialect."""
