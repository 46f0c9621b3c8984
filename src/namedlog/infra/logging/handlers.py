from __future__ import annotations

"""
Diagnostic Handler Factories.

Every handler built here is marked as owned by namedlog. Reconfiguration
and reset only ever detach marked handlers, so handlers the host
application attached to the 'namedlog' logger survive both.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from namedlog.infra.fs import ensure_parent_dir

_OWNED_MARK: str = "_namedlog_owned"


# ==============================================================================
# OWNERSHIP MARKS
# ==============================================================================

def _mark_owned(handler: logging.Handler) -> None:
    setattr(handler, _OWNED_MARK, True)


def _is_owned(handler: logging.Handler) -> bool:
    """Whether namedlog attached this handler and may remove it."""
    return bool(getattr(handler, _OWNED_MARK, False))


# ==============================================================================
# FACTORIES
# ==============================================================================

def _finish(handler: logging.Handler, level_int: int, formatter: logging.Formatter) -> logging.Handler:
    handler.setLevel(level_int)
    handler.setFormatter(formatter)
    _mark_owned(handler)
    return handler


def _stderr_handler(level_int: int, formatter: logging.Formatter) -> logging.StreamHandler:
    return _finish(logging.StreamHandler(sys.stderr), level_int, formatter)


def _diagnostics_file_handler(
        log_file: str,
        level_int: int,
        formatter: logging.Formatter,
        max_bytes: int,
        backup_count: int,
) -> Optional[RotatingFileHandler]:
    """
    Open the size-capped file that persists namedlog's own diagnostics.

    The parent directory is created on demand. When the file cannot be
    opened the problem goes straight to stderr, since the diagnostic
    channel is the thing being set up.

    Args:
        log_file: Diagnostics file path.
        level_int: Minimum record level for the file.
        formatter: Record layout shared with the console handler.
        max_bytes: Size at which the file rolls over.
        backup_count: Rolled-over files kept beside it.

    Returns:
        Optional[RotatingFileHandler]: The handler, or None when unusable.
    """
    try:
        ok, err = ensure_parent_dir(log_file)
        if not ok:
            raise OSError(err)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=int(max_bytes),
            backupCount=int(backup_count),
            encoding="utf-8",
        )
    except (OSError, ValueError) as e:
        sys.stderr.write(f"namedlog: diagnostics file '{log_file}' disabled: {e}\n")
        return None
    return _finish(fh, level_int, formatter)
