"""
Severity levels for the aiready logging core.

Six levels ordered by integer weight. A logger keeps a numeric threshold and
emits a record only when the record's weight reaches it.
"""

from enum import IntEnum
from typing import Dict, Optional, Union


class LogLevel(IntEnum):
    """Log severities, heavier is more severe."""

    TRACE = 10
    DEBUG = 20
    INFO = 30
    WARN = 40
    ERROR = 50
    FATAL = 60

    @property
    def label(self) -> str:
        """Lower-case name written to the ``level`` field."""
        return self.name.lower()


LOG_LEVELS: Dict[str, int] = {level.label: int(level) for level in LogLevel}

# Threshold above every level; nothing passes it.
SILENT: float = float("inf")


def parse_level(name: Optional[str]) -> Optional[LogLevel]:
    """
    Look up a level by name.

    Args:
        name: Level name, case-insensitive (``"info"``, ``"WARN"``)

    Returns:
        The matching LogLevel, or None when the name is not one of the six
    """
    if not isinstance(name, str):
        return None
    weight = LOG_LEVELS.get(name.strip().lower())
    return LogLevel(weight) if weight is not None else None


def is_enabled(level: Union[LogLevel, int], threshold: float) -> bool:
    return int(level) >= threshold
