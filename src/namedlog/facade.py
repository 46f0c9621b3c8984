from __future__ import annotations

"""
Free-Function Facade.

Convenience entry points that forward to the process-wide registry. Each
severity helper fixes the level; the logger name defaults to "default".
Every function returns the OperationResult of the registry call and never
raises on logging failures.
"""

from typing import Any, Optional

from namedlog.core.registry import get_registry
from namedlog.core.writer import LogWriter
from namedlog.domain.constants import DEFAULT_LOGGER_NAME
from namedlog.domain.levels import LogLevel
from namedlog.domain.results import OperationResult

# -----------------------------------------------------------------------------
# SEVERITY HELPERS
# -----------------------------------------------------------------------------

def trace(message: str, name: str = DEFAULT_LOGGER_NAME) -> OperationResult:
    return log(name, message, LogLevel.TRACE)


def debug(message: str, name: str = DEFAULT_LOGGER_NAME) -> OperationResult:
    return log(name, message, LogLevel.DEBUG)


def info(message: str, name: str = DEFAULT_LOGGER_NAME) -> OperationResult:
    return log(name, message, LogLevel.INFO)


def warning(message: str, name: str = DEFAULT_LOGGER_NAME) -> OperationResult:
    return log(name, message, LogLevel.WARN)


def error(message: str, name: str = DEFAULT_LOGGER_NAME) -> OperationResult:
    return log(name, message, LogLevel.ERROR)


def fatal(message: str, name: str = DEFAULT_LOGGER_NAME) -> OperationResult:
    return log(name, message, LogLevel.FATAL)

# -----------------------------------------------------------------------------
# DIRECT ENTRY POINTS
# -----------------------------------------------------------------------------

def log(name: str, message: str, level: LogLevel) -> OperationResult:
    """Write a message at an explicit level to the named logger."""
    return get_registry().log(name, message, level)


def set_limit_size(size: int, name: str = DEFAULT_LOGGER_NAME) -> OperationResult:
    """Set the rotation threshold, in bytes, of the named logger."""
    return get_registry().set_size_limit(size, name)


def add_logger(
        file_path: str,
        name: str = DEFAULT_LOGGER_NAME,
        level: LogLevel = LogLevel.DEBUG,
        **options: Any,
) -> OperationResult:
    """
    Register a logger on the process-wide registry.

    Extra keyword options (size_limit, save_timestamp, datetime_format,
    make_dirs, echo) are forwarded to LoggerRegistry.register.
    """
    return get_registry().register(name, file_path, level, **options)


def remove_logger(name: str = DEFAULT_LOGGER_NAME) -> OperationResult:
    return get_registry().unregister(name)


def get_writer(name: str = DEFAULT_LOGGER_NAME) -> Optional[LogWriter]:
    return get_registry().lookup(name)
