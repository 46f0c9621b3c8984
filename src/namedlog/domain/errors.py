from __future__ import annotations

"""
Error Taxonomy.

Failures inside the logging facility are never raised through registry or
facade operations. They are carried in OperationResult.error and reported
on the diagnostic channel.
"""


class NamedLogError(Exception):
    """Base class for every failure reported by the facility."""


class ConfigurationError(NamedLogError):
    """Empty target path, duplicate logger name or invalid declarative config."""


class LoggerNotFoundError(NamedLogError):
    """An operation referenced a logger name that is not registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Logger '{name}' is not registered.")
        self.name = name


class LogIOError(NamedLogError):
    """A log file could not be appended to, or a rotation rename failed."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path
