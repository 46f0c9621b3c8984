from __future__ import annotations

from .config import DIAGNOSTICS_LOGGER_NAME, DiagnosticsConfig, build_diagnostics_config
from .core import (
    configure_diagnostics,
    get_diagnostics_logger,
    reset_diagnostics,
)

__all__ = [
    "DIAGNOSTICS_LOGGER_NAME",
    "DiagnosticsConfig",
    "build_diagnostics_config",
    "configure_diagnostics",
    "get_diagnostics_logger",
    "reset_diagnostics",
]
