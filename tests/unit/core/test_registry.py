from __future__ import annotations

"""
Unit tests for the Logger Registry.

Verifies:
1. Registration uniqueness (first writer wins).
2. Lookup semantics for present and absent names.
3. Dispatch of log calls and reporting of unknown names.
4. Size limit updates, tail extraction and the process-wide instance.
"""

import logging
import threading
from pathlib import Path

import pytest

from namedlog.core.locks import PerNameLockStrategy
from namedlog.core.registry import (
    LoggerRegistry,
    get_registry,
    reset_registry,
    set_registry,
)
from namedlog.domain.config import LoggerSpec
from namedlog.domain.errors import ConfigurationError, LogIOError, LoggerNotFoundError
from namedlog.domain.levels import LogLevel

# -----------------------------------------------------------------------------
# REGISTRATION
# -----------------------------------------------------------------------------

def test_register_and_lookup(registry: LoggerRegistry, tmp_path: Path) -> None:
    """TC-01: A registered name resolves to a writer with its settings."""
    path = str(tmp_path / "app.log")
    result = registry.register("worker", path, LogLevel.INFO)

    assert result.ok is True
    writer = registry.lookup("worker")
    assert writer is not None
    assert writer.file_path == path
    assert writer.level is LogLevel.INFO
    assert "worker" in registry
    assert len(registry) == 1


def test_duplicate_registration_keeps_first(
        registry: LoggerRegistry, tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """TC-01: A second registration is rejected and the original is untouched."""
    first = str(tmp_path / "first.log")
    second = str(tmp_path / "second.log")
    registry.register("worker", first, LogLevel.WARN)

    with caplog.at_level(logging.WARNING, logger="namedlog"):
        result = registry.register("worker", second, LogLevel.TRACE)

    assert result.ok is False
    assert isinstance(result.error, ConfigurationError)
    writer = registry.lookup("worker")
    assert writer.file_path == first
    assert writer.level is LogLevel.WARN
    assert any("already exists" in r.getMessage() for r in caplog.records)


def test_register_forwards_options(registry: LoggerRegistry, tmp_path: Path) -> None:
    registry.register(
        "audit", str(tmp_path / "audit.log"), LogLevel.ERROR,
        size_limit=512, save_timestamp=False, datetime_format="%H:%M",
    )
    writer = registry.lookup("audit")

    assert writer.file_size_limit == 512
    assert writer.save_timestamp is False
    assert writer.datetime_format == "%H:%M"


def test_unregister(registry: LoggerRegistry, tmp_path: Path) -> None:
    """TC-02: Unregister removes the entry; unknown names are a silent no-op."""
    registry.register("worker", str(tmp_path / "app.log"))

    assert registry.unregister("worker").ok is True
    assert registry.lookup("worker") is None
    assert registry.unregister("worker").ok is True
    assert registry.unregister("never-registered").ok is True


def test_reregister_after_unregister(registry: LoggerRegistry, tmp_path: Path) -> None:
    """TC-02: A removed name can be registered again with new settings."""
    registry.register("worker", str(tmp_path / "a.log"))
    registry.unregister("worker")
    result = registry.register("worker", str(tmp_path / "b.log"))

    assert result.ok is True
    assert registry.lookup("worker").file_path == str(tmp_path / "b.log")


def test_lookup_absent_returns_none(registry: LoggerRegistry) -> None:
    """TC-03: Unknown names return None, never a placeholder writer."""
    assert registry.lookup("ghost") is None
    assert registry.lookup("default") is None


def test_names_sorted(registry: LoggerRegistry, tmp_path: Path) -> None:
    for name in ("zeta", "alpha", "mid"):
        registry.register(name, str(tmp_path / f"{name}.log"))
    assert registry.names() == ["alpha", "mid", "zeta"]

# -----------------------------------------------------------------------------
# DISPATCH
# -----------------------------------------------------------------------------

def test_log_dispatches_to_writer(registry: LoggerRegistry, tmp_path: Path) -> None:
    """TC-04: log() writes through the writer registered under the name."""
    path = tmp_path / "app.log"
    registry.register("worker", str(path), LogLevel.INFO)

    assert registry.log("worker", "hi", LogLevel.TRACE).written is False
    assert registry.log("worker", "started", LogLevel.INFO).written is True

    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("info : started")


def test_log_unknown_name_reports(
        registry: LoggerRegistry, caplog: pytest.LogCaptureFixture
) -> None:
    """TC-04: Logging to an unregistered name is a reported no-op."""
    with caplog.at_level(logging.WARNING, logger="namedlog"):
        result = registry.log("ghost", "boo", LogLevel.FATAL)

    assert result.ok is False
    assert isinstance(result.error, LoggerNotFoundError)
    assert result.error.name == "ghost"
    assert any("'ghost' is not registered" in r.getMessage() for r in caplog.records)


def test_log_unencodable_message_returns_error(registry: LoggerRegistry, tmp_path: Path) -> None:
    """TC-04: A write failure inside the writer comes back as a result."""
    registry.register("worker", str(tmp_path / "app.log"))

    result = registry.log("worker", "bad \udc80 byte", LogLevel.ERROR)

    assert result.ok is False
    assert isinstance(result.error, LogIOError)
    assert registry.log("worker", "fine", LogLevel.ERROR).written is True


def test_set_size_limit(registry: LoggerRegistry, tmp_path: Path) -> None:
    """TC-05: set_size_limit updates the writer, absent names are reported."""
    registry.register("worker", str(tmp_path / "app.log"))

    assert registry.set_size_limit(4096, "worker").ok is True
    assert registry.lookup("worker").file_size_limit == 4096

    missing = registry.set_size_limit(10, "ghost")
    assert missing.ok is False
    assert isinstance(missing.error, LoggerNotFoundError)


def test_locked_writer_yields_writer_or_none(registry: LoggerRegistry, tmp_path: Path) -> None:
    registry.register("worker", str(tmp_path / "app.log"))

    with registry.locked_writer("worker") as writer:
        writer.set_level(LogLevel.FATAL)
    with registry.locked_writer("ghost") as missing:
        assert missing is None

    assert registry.lookup("worker").level is LogLevel.FATAL


def test_recent_lines(registry: LoggerRegistry, tmp_path: Path) -> None:
    """TC-06: recent_lines returns the tail of the current file."""
    registry.register("worker", str(tmp_path / "app.log"), save_timestamp=False)
    for i in range(10):
        registry.log("worker", f"line {i}", LogLevel.INFO)

    assert registry.recent_lines("worker", 3) == ["info : line 7", "info : line 8", "info : line 9"]
    assert registry.recent_lines("ghost") == []


def test_apply_config(registry: LoggerRegistry, tmp_path: Path) -> None:
    specs = [
        LoggerSpec(name="a", file_path=str(tmp_path / "a.log"), level=LogLevel.INFO),
        LoggerSpec(name="a", file_path=str(tmp_path / "dup.log")),
        LoggerSpec(name="b", file_path=str(tmp_path / "b.log"), size_limit=100),
    ]
    results = registry.apply_config(specs)

    assert [r.ok for r in results] == [True, False, True]
    assert registry.lookup("a").file_path == str(tmp_path / "a.log")
    assert registry.lookup("b").file_size_limit == 100


def test_per_name_strategy_same_contract(tmp_path: Path) -> None:
    """The sharded strategy keeps the registration and dispatch contract."""
    registry = LoggerRegistry(lock_strategy=PerNameLockStrategy())
    registry.register("worker", str(tmp_path / "app.log"), save_timestamp=False)

    assert registry.register("worker", str(tmp_path / "other.log")).ok is False
    assert registry.log("worker", "ok", LogLevel.INFO).written is True
    assert registry.log("ghost", "no", LogLevel.INFO).ok is False
    assert (tmp_path / "app.log").read_text(encoding="utf-8") == "info : ok\n"

# -----------------------------------------------------------------------------
# PROCESS-WIDE INSTANCE
# -----------------------------------------------------------------------------

def test_get_registry_is_singleton() -> None:
    assert get_registry() is get_registry()


def test_get_registry_constructs_once_under_contention() -> None:
    """Concurrent first access from many threads builds one instance."""
    reset_registry()
    seen = []
    barrier = threading.Barrier(16)

    def grab() -> None:
        barrier.wait()
        seen.append(get_registry())

    threads = [threading.Thread(target=grab) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 16
    assert all(r is seen[0] for r in seen)


def test_set_registry_injects_instance(registry: LoggerRegistry) -> None:
    set_registry(registry)
    assert get_registry() is registry

    reset_registry()
    assert get_registry() is not registry
