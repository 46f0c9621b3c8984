from __future__ import annotations

from .core.locks import GlobalLockStrategy, LockStrategy, PerNameLockStrategy
from .core.registry import LoggerRegistry, get_registry, reset_registry, set_registry
from .core.writer import LogWriter
from .domain.config import LoggerSpec, build_specs_from_dict, load_config_file
from .domain.errors import (
    ConfigurationError,
    LoggerNotFoundError,
    LogIOError,
    NamedLogError,
)
from .domain.levels import LogLevel, level_to_string
from .domain.results import OperationResult
from .facade import (
    add_logger,
    debug,
    error,
    fatal,
    get_writer,
    info,
    log,
    remove_logger,
    set_limit_size,
    trace,
    warning,
)
from .infra.logging import DiagnosticsConfig, configure_diagnostics

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DiagnosticsConfig",
    "GlobalLockStrategy",
    "LockStrategy",
    "LogIOError",
    "LogLevel",
    "LogWriter",
    "LoggerNotFoundError",
    "LoggerRegistry",
    "LoggerSpec",
    "NamedLogError",
    "OperationResult",
    "PerNameLockStrategy",
    "add_logger",
    "build_specs_from_dict",
    "configure_diagnostics",
    "debug",
    "error",
    "fatal",
    "get_registry",
    "get_writer",
    "info",
    "level_to_string",
    "load_config_file",
    "log",
    "remove_logger",
    "reset_registry",
    "set_limit_size",
    "set_registry",
    "trace",
    "warning",
]
