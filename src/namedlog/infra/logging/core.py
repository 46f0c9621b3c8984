from __future__ import annotations

"""
Diagnostics Core Orchestrator.

Maintains the idempotent lifecycle of the diagnostic channel: the standard
'logging' logger through which every module of the package reports
duplicate registrations, missing loggers and I/O failures.

Without any configuration the interpreter's last-resort handler still
prints WARNING and above to stderr, so failures are never fully silent.
"""

import logging
import sys
from typing import List

from namedlog.infra.logging.config import (
    _LEVEL_MAP,
    DIAGNOSTICS_LOGGER_NAME,
    DiagnosticsConfig,
)
from namedlog.infra.logging.handlers import (
    _diagnostics_file_handler,
    _is_owned,
    _mark_owned,
    _stderr_handler,
)

# Set on the logger once configure_diagnostics has run
_CONFIGURED_FLAG_ATTR: str = "_namedlog_configured"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_diagnostics(cfg: DiagnosticsConfig, *, force: bool = False) -> logging.Logger:
    """
    Attach handlers to the 'namedlog' logger once per process.

    Only handlers created by this module are replaced, so handlers attached
    by the host application survive a reconfiguration. Never raises.

    Args:
        cfg: Level, destinations and record format.
        force: Rebuild the handlers even if already configured.

    Returns:
        logging.Logger: The configured package logger.
    """
    diag = get_diagnostics_logger()

    try:
        # Configured already: keep the current handlers
        already_configured = bool(getattr(diag, _CONFIGURED_FLAG_ATTR, False))
        if already_configured and not force:
            return diag

        level_int = _parse_level(cfg.level)
        diag.setLevel(level_int)
        diag.propagate = cfg.propagate

        # Replace, never stack, our handlers
        _detach_owned_handlers(diag)

        formatter = logging.Formatter(cfg.fmt, datefmt=cfg.datefmt)
        handlers_list: List[logging.Handler] = []

        if cfg.console:
            handlers_list.append(_stderr_handler(level_int, formatter))

        if cfg.log_file:
            fh = _diagnostics_file_handler(
                cfg.log_file,
                level_int,
                formatter,
                cfg.max_bytes,
                cfg.backup_count
            )
            if fh:
                handlers_list.append(fh)

        for h in handlers_list:
            diag.addHandler(h)

        setattr(diag, _CONFIGURED_FLAG_ATTR, True)
        return diag

    # Any setup failure leaves a bare stderr handler behind
    except Exception:
        _detach_owned_handlers(diag)
        diag.setLevel(logging.WARNING)

        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        _mark_owned(sh)
        diag.addHandler(sh)

        diag.warning("Diagnostic infrastructure failed. Switched to emergency console.")
        return diag


def reset_diagnostics() -> None:
    """Detach every handler installed by configure_diagnostics."""
    diag = get_diagnostics_logger()
    _detach_owned_handlers(diag)
    diag.setLevel(logging.NOTSET)
    diag.propagate = True
    if hasattr(diag, _CONFIGURED_FLAG_ATTR):
        delattr(diag, _CONFIGURED_FLAG_ATTR)


def get_diagnostics_logger() -> logging.Logger:
    """
    Return the logger every namedlog module reports through.

    Returns:
        logging.Logger: The 'namedlog' logger, parent of every module logger.
    """
    return logging.getLogger(DIAGNOSTICS_LOGGER_NAME)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Level name to logging constant; unknown names mean WARNING."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _detach_owned_handlers(diag: logging.Logger) -> None:
    """Detach and close the handlers namedlog attached."""
    for h in list(diag.handlers):
        if _is_owned(h):
            diag.removeHandler(h)
            h.close()
