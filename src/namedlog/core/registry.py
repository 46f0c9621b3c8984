from __future__ import annotations

"""
Logger Registry Service.

Acts as the central directory of named log streams. Maps logical logger
names to the LogWriter that owns each target file and serializes every
operation through a lock strategy, so writes to one logger never
interleave and a writer cannot be removed while it is writing.

A process-wide instance is built lazily on first access. Applications that
prefer explicit wiring can construct their own LoggerRegistry and inject it
with set_registry().
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from namedlog.core.locks import GlobalLockStrategy, LockStrategy
from namedlog.core.writer import Clock, LogWriter
from namedlog.domain.config import LoggerSpec, apply_logger_specs
from namedlog.domain.constants import (
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_TAIL_LINES,
    UNLIMITED_SIZE,
)
from namedlog.domain.errors import ConfigurationError, LoggerNotFoundError
from namedlog.domain.levels import LogLevel
from namedlog.domain.results import (
    OperationResult,
    create_error_result,
    create_success_result,
)
from namedlog.infra.fs import read_tail

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# REGISTRY SERVICE
# -----------------------------------------------------------------------------

class LoggerRegistry:
    """
    Thread-safe directory of named, file-backed log writers.

    The registry is the sole owner of its writers. Handles returned by
    lookup() are transient: they must not be kept across an unregister()
    of the same name.
    """

    def __init__(self, lock_strategy: Optional[LockStrategy] = None, clock: Optional[Clock] = None) -> None:
        """
        Initialize an empty registry.

        Args:
            lock_strategy: Serialization policy. Defaults to one global lock.
            clock: Time source handed to every writer created here.
        """
        self._writers: Dict[str, LogWriter] = {}
        self._locks = lock_strategy or GlobalLockStrategy()
        self._clock = clock

    def __contains__(self, name: object) -> bool:
        with self._locks.mapping_guard():
            return name in self._writers

    def __len__(self) -> int:
        with self._locks.mapping_guard():
            return len(self._writers)

    @property
    def lock_strategy(self) -> LockStrategy:
        return self._locks

    def names(self) -> List[str]:
        """Return the registered logger names, sorted."""
        with self._locks.mapping_guard():
            return sorted(self._writers)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def register(
            self,
            name: str,
            file_path: str,
            level: LogLevel = LogLevel.DEBUG,
            *,
            size_limit: int = UNLIMITED_SIZE,
            save_timestamp: bool = True,
            datetime_format: str = DEFAULT_DATETIME_FORMAT,
            make_dirs: bool = False,
            echo: bool = False,
    ) -> OperationResult:
        """
        Create a writer for a new logger name.

        An existing name is never overwritten: the call is rejected and the
        original writer is left untouched.

        Args:
            name: Logical logger name.
            file_path: Target log file.
            level: Minimum severity accepted.
            size_limit: Rotation threshold in bytes; <= 0 means unlimited.
            save_timestamp: Prefix each line with the current time.
            datetime_format: strftime pattern for line timestamps.
            make_dirs: Create the parent directory before each append.
            echo: Mirror written lines to the diagnostic channel.

        Returns:
            OperationResult: ok=False with a ConfigurationError on duplicates.
        """
        with self._locks.hold(name):
            with self._locks.mapping_guard():
                if name in self._writers:
                    err = ConfigurationError(f"Logger '{name}' already exists.")
                    logger.warning(f"Registry: {err}")
                    return create_error_result(err, path=self._writers[name].file_path)

                self._writers[name] = LogWriter(
                    file_path,
                    level,
                    size_limit=size_limit,
                    save_timestamp=save_timestamp,
                    datetime_format=datetime_format,
                    make_dirs=make_dirs,
                    echo=echo,
                    clock=self._clock,
                )
                self._locks.add_name(name)

        logger.debug(f"Registry: Logger '{name}' registered -> {file_path}")
        return create_success_result(path=file_path)

    def unregister(self, name: str) -> OperationResult:
        """
        Remove a logger. Removing an unknown name is a silent no-op.

        Args:
            name: Logical logger name.

        Returns:
            OperationResult: Always ok.
        """
        with self._locks.hold(name):
            with self._locks.mapping_guard():
                writer = self._writers.pop(name, None)
                self._locks.discard_name(name)

        if writer is None:
            return create_success_result()

        logger.debug(f"Registry: Logger '{name}' unregistered.")
        return create_success_result(path=writer.file_path)

    def lookup(self, name: str) -> Optional[LogWriter]:
        """
        Fetch the live writer registered under a name.

        Args:
            name: Logical logger name.

        Returns:
            Optional[LogWriter]: The writer, or None if absent.
        """
        with self._locks.mapping_guard():
            return self._writers.get(name)

    @contextmanager
    def locked_writer(self, name: str) -> Iterator[Optional[LogWriter]]:
        """
        Yield the writer for a name while holding its lock.

        Use this to change writer settings without racing concurrent writes.
        An unknown name yields None without holding any lock.
        """
        with self._locks.hold(name):
            writer = self.lookup(name)
            if writer is not None:
                yield writer
                return
        yield None

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------

    def log(self, name: str, message: str, level: Any) -> OperationResult:
        """
        Dispatch a message to the writer registered under a name.

        This is the only path through which writers are used.

        Args:
            name: Logical logger name.
            message: Message text.
            level: Severity of the message.

        Returns:
            OperationResult: ok=False with a LoggerNotFoundError if the name
            is not registered, otherwise the writer's result.
        """
        with self._locks.hold(name):
            writer = self.lookup(name)
            if writer is None:
                err = LoggerNotFoundError(name)
                logger.warning(f"Registry: {err}")
                return create_error_result(err)
            return writer.write(message, level)

    def set_size_limit(self, size: int, name: str) -> OperationResult:
        """
        Update the rotation threshold of a registered logger.

        Args:
            size: New limit in bytes; <= 0 disables rotation.
            name: Logical logger name.

        Returns:
            OperationResult: ok=False with a LoggerNotFoundError if absent.
        """
        with self._locks.hold(name):
            writer = self.lookup(name)
            if writer is None:
                err = LoggerNotFoundError(name)
                logger.warning(f"Registry: {err}")
                return create_error_result(err)
            writer.set_file_size_limit(size)
            return create_success_result(path=writer.file_path)

    def apply_config(self, specs: List[LoggerSpec]) -> List[OperationResult]:
        """Register a batch of declarative logger definitions."""
        return apply_logger_specs(self, specs)

    def recent_lines(self, name: str, n_lines: int = DEFAULT_TAIL_LINES) -> List[str]:
        """
        Extract the last lines of a logger's current file.

        Used to attach execution context to crash or feedback reports.

        Args:
            name: Logical logger name.
            n_lines: Maximum number of lines to return.

        Returns:
            List[str]: The lines, empty if the logger or file is missing.
        """
        with self._locks.hold(name):
            writer = self.lookup(name)
            if writer is None or not writer.file_path:
                return []
            return read_tail(writer.file_path, n_lines)


# -----------------------------------------------------------------------------
# PROCESS-WIDE INSTANCE
# -----------------------------------------------------------------------------

_INSTANCE: Optional[LoggerRegistry] = None
_INSTANCE_LOCK = threading.Lock()


def get_registry() -> LoggerRegistry:
    """
    Return the process-wide registry, building it exactly once.

    Construction is double-checked: existence is tested, the construct-once
    lock is taken, and existence is tested again before building.
    """
    global _INSTANCE
    if _INSTANCE is None:
        with _INSTANCE_LOCK:
            if _INSTANCE is None:
                _INSTANCE = LoggerRegistry()
    return _INSTANCE


def set_registry(registry: LoggerRegistry) -> None:
    """Install an explicitly constructed registry as the process-wide one."""
    global _INSTANCE
    with _INSTANCE_LOCK:
        _INSTANCE = registry


def reset_registry() -> None:
    """Drop the process-wide registry; the next access builds a new one."""
    global _INSTANCE
    with _INSTANCE_LOCK:
        _INSTANCE = None
