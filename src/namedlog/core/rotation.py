from __future__ import annotations

"""
Size-Triggered Rotation.

Moves an oversized log file aside so the next append starts a fresh file at
the original path. The rotated file keeps the original directory and
suffix, with the rotation time inserted after the base name:

    app.log  ->  app_<DDMMYYYYhhmmss>.log

Two rotations within the same second would produce the same name; in that
case a counter is appended (app_<stamp>_1.log, app_<stamp>_2.log, ...) so
an earlier rotated file is never overwritten.
"""

import logging
import os
from datetime import datetime
from typing import Optional

from namedlog.domain.constants import ROTATION_STAMP_FORMAT
from namedlog.domain.errors import LogIOError
from namedlog.infra.fs import file_size, split_file_name

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# NAMING
# -----------------------------------------------------------------------------

def build_rotated_path(file_path: str, when: datetime, counter: int = 0) -> str:
    """
    Compute the rotated file path for a given rotation time.

    Args:
        file_path: The active log file.
        when: Rotation timestamp.
        counter: Disambiguation counter, omitted when 0.

    Returns:
        str: Absolute path of the rotated file.
    """
    directory, base, suffix = split_file_name(file_path)
    name = f"{base}_{when.strftime(ROTATION_STAMP_FORMAT)}"
    if counter:
        name = f"{name}_{counter}"
    if suffix:
        name = f"{name}.{suffix}"
    return os.path.join(directory, name)


def resolve_rotation_target(file_path: str, when: datetime) -> str:
    """
    Find the first rotated path that does not exist yet.

    Args:
        file_path: The active log file.
        when: Rotation timestamp.

    Returns:
        str: A free rotated path.
    """
    counter = 0
    target = build_rotated_path(file_path, when)
    while os.path.exists(target):
        counter += 1
        target = build_rotated_path(file_path, when, counter)
    return target


# -----------------------------------------------------------------------------
# ROTATION
# -----------------------------------------------------------------------------

def needs_rotation(file_path: str, size_limit: int) -> bool:
    """
    Tell whether a file has reached its size limit.

    A limit at or below zero means unlimited.
    """
    if size_limit <= 0:
        return False
    return file_size(file_path) >= size_limit


def rotate_file(file_path: str, when: datetime) -> str:
    """
    Rename the active file to its rotated name.

    Args:
        file_path: The active log file.
        when: Rotation timestamp.

    Returns:
        str: The path the file was moved to.

    Raises:
        LogIOError: If the rename fails.
    """
    target = resolve_rotation_target(file_path, when)
    try:
        os.rename(file_path, target)
    except (OSError, ValueError) as e:
        raise LogIOError(
            f"Unable to rotate '{file_path}' to '{target}': {e}", path=file_path
        ) from e

    logger.info(f"Rotation: '{file_path}' moved to '{target}'.")
    return target


def rotate_if_needed(file_path: str, size_limit: int, when: datetime) -> Optional[str]:
    """
    Rotate the file when it has reached the size limit.

    Args:
        file_path: The active log file.
        size_limit: Threshold in bytes; <= 0 disables rotation.
        when: Rotation timestamp.

    Returns:
        Optional[str]: The rotated path, or None if no rotation was needed.

    Raises:
        LogIOError: If a needed rotation could not be performed.
    """
    if not needs_rotation(file_path, size_limit):
        return None
    return rotate_file(file_path, when)
