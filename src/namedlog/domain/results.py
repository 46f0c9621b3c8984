from __future__ import annotations

"""
Operation Result Models.

Defines the immutable result returned by every registry and writer
operation, and the factory functions used to build it. Results are the
primary failure signal; the diagnostic channel is secondary.
"""

from dataclasses import dataclass
from typing import Optional

from namedlog.domain.errors import NamedLogError

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class OperationResult:
    """
    Outcome of a single logging facility operation.

    Attributes:
        ok: False when the operation failed.
        written: True only when a line was appended to a log file.
        error: The failure, when ok is False.
        path: File involved in the operation, when relevant.
    """
    ok: bool
    written: bool = False
    error: Optional[NamedLogError] = None
    path: str = ""

    def __bool__(self) -> bool:
        return self.ok

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_success_result(written: bool = False, path: str = "") -> OperationResult:
    """
    Create a successful operation result.

    Args:
        written: Whether a line reached the target file.
        path: File involved in the operation.

    Returns:
        OperationResult: An immutable success result.
    """
    return OperationResult(ok=True, written=written, path=path)


def create_error_result(error: NamedLogError, path: str = "") -> OperationResult:
    """
    Create a failed operation result.

    Args:
        error: The failure being reported.
        path: File involved in the operation.

    Returns:
        OperationResult: An immutable error result.
    """
    return OperationResult(ok=False, written=False, error=error, path=path)
