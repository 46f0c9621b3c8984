from __future__ import annotations

"""
Severity Levels.

Defines the ordered severity scale used to filter messages and the fixed
mapping between severities and the lowercase names written to log files.
"""

from enum import IntEnum
from typing import Any, Dict, Optional

from namedlog.domain.constants import INVALID_LEVEL_NAME


class LogLevel(IntEnum):
    """Ordered severity scale, ascending."""
    TRACE = 0
    DEBUG = 1
    INFO = 2
    WARN = 3
    ERROR = 4
    FATAL = 5


_LEVEL_NAMES: Dict[LogLevel, str] = {
    LogLevel.TRACE: "trace",
    LogLevel.DEBUG: "debug",
    LogLevel.INFO: "info",
    LogLevel.WARN: "warning",
    LogLevel.ERROR: "error",
    LogLevel.FATAL: "fatal",
}

# Tolerant aliases accepted from configuration sources
_LEVEL_ALIASES: Dict[str, LogLevel] = {
    "TRACE": LogLevel.TRACE,
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARN": LogLevel.WARN,
    "WARNING": LogLevel.WARN,
    "ERROR": LogLevel.ERROR,
    "FATAL": LogLevel.FATAL,
    "CRITICAL": LogLevel.FATAL,
}


def level_to_string(level: Any) -> str:
    """
    Resolve the display name written to log files for a severity.

    The mapping is total: any value outside the scale yields "INVALID"
    instead of raising.

    Args:
        level: A LogLevel member or its integer value.

    Returns:
        str: Lowercase severity name, or "INVALID".
    """
    try:
        return _LEVEL_NAMES[LogLevel(level)]
    except (ValueError, TypeError):
        return INVALID_LEVEL_NAME


def parse_level(value: Any, default: Optional[LogLevel] = None) -> Optional[LogLevel]:
    """
    Convert a loosely typed level (name, alias, int or member) to a LogLevel.

    Args:
        value: Raw level value, e.g. "warn", "INFO", 3 or LogLevel.WARN.
        default: Returned when the value cannot be interpreted.

    Returns:
        Optional[LogLevel]: The parsed level, or default.
    """
    if isinstance(value, LogLevel):
        return value
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        try:
            return LogLevel(value)
        except ValueError:
            return default
    if isinstance(value, str) and value.strip():
        return _LEVEL_ALIASES.get(value.strip().upper(), default)
    return default
