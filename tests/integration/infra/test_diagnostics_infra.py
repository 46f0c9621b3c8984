from __future__ import annotations

"""
Integration tests for the Diagnostics Infrastructure.

Verifies idempotency of configuration, preservation of foreign handlers,
persistence of diagnostics to a rotating file, and that registry failures
actually reach the configured channel.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Generator

import pytest

from namedlog.core.registry import LoggerRegistry
from namedlog.domain.levels import LogLevel
from namedlog.infra.logging import (
    DiagnosticsConfig,
    configure_diagnostics,
    get_diagnostics_logger,
    reset_diagnostics,
)
from namedlog.infra.logging.handlers import _is_owned


@pytest.fixture(autouse=True)
def clean_diagnostics() -> Generator[None, None, None]:
    """Detach our handlers before and after each test."""
    reset_diagnostics()
    yield
    reset_diagnostics()


def _our_handlers() -> list:
    return [h for h in get_diagnostics_logger().handlers if _is_owned(h)]


def test_configure_idempotency() -> None:
    """TC-01: Repeated configuration does not duplicate handlers."""
    cfg = DiagnosticsConfig(level="INFO", console=True)

    configure_diagnostics(cfg)
    initial = len(_our_handlers())
    configure_diagnostics(cfg)

    assert initial == 1
    assert len(_our_handlers()) == initial, "Handlers were duplicated."


def test_force_reconfigure_keeps_foreign_handlers() -> None:
    """TC-02: force=True replaces only our handlers."""
    diag = get_diagnostics_logger()
    foreign = logging.NullHandler()
    diag.addHandler(foreign)
    try:
        configure_diagnostics(DiagnosticsConfig(console=True))
        configure_diagnostics(DiagnosticsConfig(console=True, level="ERROR"), force=True)

        assert foreign in diag.handlers
        assert len(_our_handlers()) == 1
        assert diag.level == logging.ERROR
    finally:
        diag.removeHandler(foreign)


def test_diagnostics_file_receives_registry_failures(tmp_path: Path) -> None:
    """TC-03: A missing logger is reported into the diagnostics file."""
    diag_file = tmp_path / "diag" / "namedlog.log"
    cfg = DiagnosticsConfig(level="WARNING", console=False, log_file=str(diag_file), propagate=False)
    configure_diagnostics(cfg)

    LoggerRegistry().log("ghost", "lost", LogLevel.ERROR)
    for h in _our_handlers():
        h.flush()

    content = diag_file.read_text(encoding="utf-8")
    assert "WARNING" in content
    assert "'ghost' is not registered" in content
    assert any(isinstance(h, RotatingFileHandler) for h in _our_handlers())


def test_unwritable_diagnostics_file_falls_back(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    """TC-04: An unusable diagnostics path is reported and skipped."""
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    cfg = DiagnosticsConfig(console=False, log_file=str(blocker / "namedlog.log"))
    diag = configure_diagnostics(cfg)

    assert diag is get_diagnostics_logger()
    assert _our_handlers() == []
    assert "diagnostics file" in capsys.readouterr().err
