from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for registries, fixed clocks and global state resets.
"""

import os
import sys
from datetime import datetime
from typing import Callable, Generator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from namedlog.core.registry import LoggerRegistry, reset_registry  # noqa: E402

FIXED_NOW = datetime(2024, 3, 5, 14, 7, 9)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """
    Return a clock frozen at 2024-03-05 14:07:09.

    Line timestamps become '2024-03-05-14-07-09' and rotation stamps
    '05032024140709'.
    """
    return lambda: FIXED_NOW


@pytest.fixture
def registry(fixed_clock: Callable[[], datetime]) -> LoggerRegistry:
    """Provide a fresh, explicitly constructed registry with a fixed clock."""
    return LoggerRegistry(clock=fixed_clock)


@pytest.fixture(autouse=True)
def isolated_global_registry() -> Generator[None, None, None]:
    """Drop the process-wide registry before and after each test."""
    reset_registry()
    yield
    reset_registry()
