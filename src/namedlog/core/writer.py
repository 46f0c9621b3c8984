from __future__ import annotations

"""
File-Backed Log Writer.

A LogWriter owns one target file and its policy: minimum severity, size
limit, timestamp format. Each write filters by level, rotates the file if
it has grown past its limit, formats the line and appends it. The file is
opened and closed on every write so no descriptor lingers between calls.

Writers hold no lock. Callers must serialize access; the registry does.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Optional

from namedlog.core.rotation import rotate_if_needed
from namedlog.domain.constants import (
    DEFAULT_DATETIME_FORMAT,
    FIELD_SEPARATOR,
    UNLIMITED_SIZE,
)
from namedlog.domain.errors import ConfigurationError, LogIOError
from namedlog.domain.levels import LogLevel, level_to_string
from namedlog.domain.results import (
    OperationResult,
    create_error_result,
    create_success_result,
)
from namedlog.infra.fs import ensure_parent_dir

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class LogWriter:
    """
    Writes leveled messages to a single file with size-triggered rotation.

    Persisted line format:
        [<timestamp> : ]<severity> : <message>
    """

    def __init__(
            self,
            file_path: str = "",
            level: LogLevel = LogLevel.DEBUG,
            *,
            size_limit: int = UNLIMITED_SIZE,
            save_timestamp: bool = True,
            datetime_format: str = DEFAULT_DATETIME_FORMAT,
            make_dirs: bool = False,
            echo: bool = False,
            clock: Optional[Clock] = None,
    ) -> None:
        """
        Initialize a writer.

        Args:
            file_path: Target file. Empty marks the writer as mis-configured.
            level: Minimum severity accepted.
            size_limit: Rotation threshold in bytes; <= 0 means unlimited.
            save_timestamp: Prefix each line with the current time.
            datetime_format: strftime pattern for the line timestamp.
            make_dirs: Create the parent directory before appending.
            echo: Mirror every written line to the diagnostic channel.
            clock: Source of the current time.
        """
        self._file_path = file_path
        self._level = LogLevel(level)
        self._size_limit = int(size_limit)
        self._save_timestamp = bool(save_timestamp)
        self._datetime_format = datetime_format
        self._make_dirs = bool(make_dirs)
        self._echo = bool(echo)
        self._clock: Clock = clock or datetime.now

    def __repr__(self) -> str:
        return (
            f"LogWriter(file_path={self._file_path!r}, level={self._level.name}, "
            f"size_limit={self._size_limit})"
        )

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def level(self) -> LogLevel:
        return self._level

    @property
    def file_size_limit(self) -> int:
        return self._size_limit

    @property
    def save_timestamp(self) -> bool:
        return self._save_timestamp

    @property
    def datetime_format(self) -> str:
        return self._datetime_format

    @property
    def make_dirs(self) -> bool:
        return self._make_dirs

    @property
    def echo(self) -> bool:
        return self._echo

    def file_info(self) -> Path:
        """Return the target file as a Path."""
        return Path(self._file_path)

    def level_to_string(self, level: Any = None) -> str:
        """
        Display name of a severity, or of the writer's own level if omitted.
        """
        return level_to_string(self._level if level is None else level)

    # -------------------------------------------------------------------------
    # Setters
    # -------------------------------------------------------------------------

    def set_level(self, level: LogLevel) -> None:
        self._level = LogLevel(level)

    def set_file_path(self, file_path: str) -> None:
        self._file_path = file_path

    def set_file_size_limit(self, limit: int) -> None:
        self._size_limit = int(limit)

    def set_save_timestamp(self, save: bool) -> None:
        self._save_timestamp = bool(save)

    def set_datetime_format(self, datetime_format: str) -> None:
        self._datetime_format = datetime_format

    def set_make_dirs(self, make_dirs: bool) -> None:
        self._make_dirs = bool(make_dirs)

    def set_echo(self, echo: bool) -> None:
        self._echo = bool(echo)

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def format_line(self, message: str, level: Any) -> str:
        """
        Compose a log line without the trailing newline.

        Args:
            message: Message text.
            level: Severity of the message.

        Returns:
            str: '[<timestamp> : ]<severity> : <message>'.
        """
        line = f"{level_to_string(level)}{FIELD_SEPARATOR}{message}"
        if self._save_timestamp:
            stamp = self._clock().strftime(self._datetime_format)
            line = f"{stamp}{FIELD_SEPARATOR}{line}"
        return line

    def check_file_size_limit(self) -> Optional[str]:
        """
        Rotate the target file if it has reached the size limit.

        Rotation failure is not fatal: it is reported and the oversized file
        is retried on a later write.

        Returns:
            Optional[str]: The rotated path, or None if nothing was rotated.
        """
        if self._size_limit <= 0 or not self._file_path:
            return None
        try:
            return rotate_if_needed(self._file_path, self._size_limit, self._clock())
        except LogIOError as e:
            logger.error(f"Writer: {e}")
            return None

    def write(self, message: str, level: Any) -> OperationResult:
        """
        Append a message if its severity reaches the writer's level.

        Never raises. A message below the level is dropped silently and is
        not a failure.

        Args:
            message: Message text.
            level: Severity of the message.

        Returns:
            OperationResult: written=True if the line reached the file.
        """
        if level < self._level:
            return create_success_result(written=False, path=self._file_path)

        if not self._file_path:
            err = ConfigurationError("Log file path cannot be empty.")
            logger.warning(f"Writer: {err}")
            return create_error_result(err)

        self.check_file_size_limit()

        line = self.format_line(message, level)

        try:
            if self._make_dirs:
                ok, mk_err = ensure_parent_dir(self._file_path)
                if not ok:
                    raise OSError(mk_err)
            with open(self._file_path, "a", encoding="utf-8") as f:
                f.write(f"{line}\n")
        except (OSError, ValueError) as e:
            # ValueError covers NUL bytes in the path and unencodable text
            err = LogIOError(f"Unable to write '{self._file_path}': {e}", path=self._file_path)
            logger.error(f"Writer: {err}")
            return create_error_result(err, path=self._file_path)

        if self._echo:
            logger.debug(line)

        return create_success_result(written=True, path=self._file_path)
