from __future__ import annotations

"""
Declarative Logger Configuration.

Loads logger definitions from dictionaries or JSON files, validates them,
and applies them to a registry. Expected structure:

    {
        "version": "1.0.0",
        "diagnostics": {"level": "WARNING", "console": true},
        "loggers": {
            "worker": {
                "file_path": "logs/worker.log",
                "level": "info",
                "size_limit": 1048576,
                "save_timestamp": true,
                "datetime_format": "%Y-%m-%d %H:%M:%S"
            }
        }
    }

The optional "version" must share the major number of CURRENT_CONFIG_VERSION;
a document from another major is rejected whole. Invalid entries are
skipped with a warning. With strict=True they raise ConfigurationError
instead.
"""

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from namedlog.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_DATETIME_FORMAT,
    UNLIMITED_SIZE,
)
from namedlog.domain.errors import ConfigurationError
from namedlog.domain.levels import LogLevel, parse_level
from namedlog.domain.results import OperationResult
from namedlog.infra.logging.config import DiagnosticsConfig, build_diagnostics_config

if TYPE_CHECKING:
    from namedlog.core.registry import LoggerRegistry

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Configuration Models
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LoggerSpec:
    """
    Declarative definition of one named logger.

    Attributes:
        name: Logical logger name.
        file_path: Target log file.
        level: Minimum severity accepted.
        size_limit: Rotation threshold in bytes; <= 0 means unlimited.
        save_timestamp: Prefix lines with the current time.
        datetime_format: strftime pattern for line timestamps.
        make_dirs: Create the parent directory before appending.
        echo: Mirror written lines to the diagnostic channel.
    """
    name: str
    file_path: str
    level: LogLevel = LogLevel.DEBUG
    size_limit: int = UNLIMITED_SIZE
    save_timestamp: bool = True
    datetime_format: str = DEFAULT_DATETIME_FORMAT
    make_dirs: bool = False
    echo: bool = False


@dataclass(frozen=True)
class LoadedConfig:
    """Result of loading a configuration source."""
    loggers: List[LoggerSpec]
    diagnostics: Optional[DiagnosticsConfig]
    warnings: List[str]


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------

def build_specs_from_dict(data: Any, *, strict: bool = False) -> Tuple[List[LoggerSpec], List[str]]:
    """
    Validate and normalize the 'loggers' section of a configuration dict.

    Args:
        data: Parsed configuration, expected to be a dict.
        strict: Raise on the first invalid entry instead of skipping it.

    Returns:
        Tuple[List[LoggerSpec], List[str]]: (valid specs, warnings).

    Raises:
        ConfigurationError: In strict mode, on any invalid entry.
    """
    warnings: List[str] = []

    if not isinstance(data, dict):
        _reject(f"Invalid config: expected dict, got {type(data).__name__}.", warnings, strict)
        return [], warnings

    if not _version_supported(data.get("version"), warnings, strict):
        return [], warnings

    section = data.get("loggers", {})
    if not isinstance(section, dict):
        _reject("Invalid config: 'loggers' must be a mapping of name -> options.", warnings, strict)
        return [], warnings

    specs: List[LoggerSpec] = []
    for name, options in section.items():
        spec = _build_spec(str(name), options, warnings, strict)
        if spec is not None:
            specs.append(spec)

    return specs, warnings


def load_config_file(path: str, *, strict: bool = False) -> LoadedConfig:
    """
    Load logger definitions and diagnostics settings from a JSON file.

    A missing, unreadable or malformed file yields an empty configuration
    with a warning.

    Args:
        path: JSON file path.
        strict: Raise instead of warning.

    Returns:
        LoadedConfig: Specs, optional diagnostics config and warnings.

    Raises:
        ConfigurationError: In strict mode, on any load or validation error.
    """
    warnings: List[str] = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        _reject(f"Unable to load config '{path}': {e}", warnings, strict)
        return LoadedConfig(loggers=[], diagnostics=None, warnings=warnings)

    specs, spec_warnings = build_specs_from_dict(data, strict=strict)
    warnings.extend(spec_warnings)

    diagnostics: Optional[DiagnosticsConfig] = None
    raw_diag = data.get("diagnostics") if isinstance(data, dict) else None
    if isinstance(raw_diag, dict) and _is_supported_version(data.get("version")):
        try:
            diagnostics = build_diagnostics_config(raw_diag)
        except (TypeError, ValueError) as e:
            _reject(f"Invalid 'diagnostics' section: {e}", warnings, strict)

    return LoadedConfig(loggers=specs, diagnostics=diagnostics, warnings=warnings)


def apply_logger_specs(registry: LoggerRegistry, specs: List[LoggerSpec]) -> List[OperationResult]:
    """
    Register every spec on a registry.

    Names already registered are rejected by the registry and reported in
    the corresponding result.

    Args:
        registry: Target registry.
        specs: Definitions to register.

    Returns:
        List[OperationResult]: One result per spec, in order.
    """
    results: List[OperationResult] = []
    for spec in specs:
        results.append(registry.register(
            spec.name,
            spec.file_path,
            spec.level,
            size_limit=spec.size_limit,
            save_timestamp=spec.save_timestamp,
            datetime_format=spec.datetime_format,
            make_dirs=spec.make_dirs,
            echo=spec.echo,
        ))
    return results


# -----------------------------------------------------------------------------
# Internal Helpers
# -----------------------------------------------------------------------------

def _reject(msg: str, warnings: List[str], strict: bool) -> None:
    if strict:
        raise ConfigurationError(msg)
    warnings.append(msg)
    logger.warning(msg)


def _is_supported_version(version: Any) -> bool:
    # Absent means "written for the current format"
    if version is None:
        return True
    if not isinstance(version, str):
        return False
    return version.split(".")[0].strip() == CURRENT_CONFIG_VERSION.split(".")[0]


def _version_supported(version: Any, warnings: List[str], strict: bool) -> bool:
    if _is_supported_version(version):
        return True
    _reject(
        f"Invalid config: version {version!r} is not supported "
        f"(expected {CURRENT_CONFIG_VERSION}).",
        warnings,
        strict,
    )
    return False


def _build_spec(name: str, options: Any, warnings: List[str], strict: bool) -> Optional[LoggerSpec]:
    if not name.strip():
        _reject("Logger entry skipped: empty name.", warnings, strict)
        return None

    # A bare string is shorthand for the file path
    if isinstance(options, str):
        options = {"file_path": options}
    if not isinstance(options, dict):
        _reject(f"Logger '{name}' skipped: options must be a mapping.", warnings, strict)
        return None

    file_path = options.get("file_path") or options.get("file")
    if not isinstance(file_path, str) or not file_path.strip():
        _reject(f"Logger '{name}' skipped: 'file_path' is required.", warnings, strict)
        return None

    level = parse_level(options.get("level", LogLevel.DEBUG))
    if level is None:
        _reject(f"Logger '{name}' skipped: unknown level {options.get('level')!r}.", warnings, strict)
        return None

    size_limit = options.get("size_limit", UNLIMITED_SIZE)
    if isinstance(size_limit, bool) or not isinstance(size_limit, int):
        _reject(f"Logger '{name}' skipped: 'size_limit' must be an integer.", warnings, strict)
        return None

    datetime_format = options.get("datetime_format", DEFAULT_DATETIME_FORMAT)
    if not isinstance(datetime_format, str):
        _reject(f"Logger '{name}' skipped: 'datetime_format' must be a string.", warnings, strict)
        return None

    return LoggerSpec(
        name=name,
        file_path=file_path,
        level=level,
        size_limit=size_limit,
        save_timestamp=bool(options.get("save_timestamp", True)),
        datetime_format=datetime_format,
        make_dirs=bool(options.get("make_dirs", False)),
        echo=bool(options.get("echo", False)),
    )
