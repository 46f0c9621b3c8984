from __future__ import annotations

"""
Diagnostics Configuration Models.

Defines the data structures and constants required to initialize the
diagnostic channel of the facility. Includes the primary configuration
dataclass and severity level mappings.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

# Name of the logger every module of the package reports through
DIAGNOSTICS_LOGGER_NAME: str = "namedlog"

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class DiagnosticsConfig:
    """
    Immutable specification for the diagnostic channel initialization.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        log_file: Optional path for persistent diagnostic storage.
        max_bytes: Maximum size per diagnostic segment before rotation.
        backup_count: Number of historical segments to preserve.
        propagate: Whether records continue to ancestor loggers.
        fmt: Structural format for entries.
        datefmt: Chronological format for timestamp generation.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 2 * 1024 * 1024  # Default: 2MB
    backup_count: int = 3
    propagate: bool = True

    fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"


def build_diagnostics_config(d: Dict[str, Any]) -> DiagnosticsConfig:
    """
    Build a DiagnosticsConfig from a dict (e.g. the 'diagnostics' section
    of a JSON config file). Unknown keys are ignored.

    Accepted keys (tolerant):
      - level / log_level
      - console
      - log_file / file
      - max_bytes, backup_count, propagate
    """
    defaults = DiagnosticsConfig()
    return DiagnosticsConfig(
        level=str(d.get("level") or d.get("log_level") or defaults.level),
        console=bool(d.get("console", defaults.console)),
        log_file=d.get("log_file") or d.get("file") or None,
        max_bytes=int(d.get("max_bytes", defaults.max_bytes)),
        backup_count=int(d.get("backup_count", defaults.backup_count)),
        propagate=bool(d.get("propagate", defaults.propagate)),
        fmt=str(d.get("fmt") or defaults.fmt),
        datefmt=str(d.get("datefmt") or defaults.datefmt),
    )
