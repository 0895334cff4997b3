# schema/config.py

from dataclasses import dataclass


@dataclass(frozen=True)
class JSONFormatConfig:
    """Output settings for exported tool documents.

    Immutable. Explicit. No magic defaults from environment.
    """

    indent: int | None = 2
    ensure_ascii: bool = False
    copy_suffix: str = "_copy"  # Appended to names of duplicated functions
