from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides the small set of filesystem primitives the writers rely on:
size probing, parent directory creation, file name splitting and log
tail extraction. Acts as an abstraction over the 'os' module so the core
never touches paths directly.
"""

import os
from collections import deque
from typing import List, Optional, Tuple

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def split_file_name(path: str) -> Tuple[str, str, str]:
    """
    Split a file path into directory, base name and complete suffix.

    The base name ends at the first dot of the file name and the suffix is
    everything after it, so 'app.log.txt' yields ('app', 'log.txt').

    Args:
        path: File path to split.

    Returns:
        Tuple[str, str, str]: (absolute directory, base name, suffix).
    """
    directory, file_name = os.path.split(os.path.abspath(path))
    base, sep, suffix = file_name.partition(".")
    return directory, base, suffix if sep else ""


def file_size(path: str) -> int:
    """
    Return the size of a file in bytes.

    Args:
        path: File to inspect.

    Returns:
        int: Size in bytes, 0 if the file does not exist or the path is unusable.
    """
    try:
        return os.path.getsize(path)
    except (OSError, ValueError):
        return 0

# -----------------------------------------------------------------------------
# FILESYSTEM OPERATIONS API
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except (OSError, ValueError) as e:
        return False, str(e)


def ensure_parent_dir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Create the parent directory hierarchy for a target file if missing.

    Args:
        path: Target file path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    parent = os.path.dirname(os.path.abspath(path))
    if not parent or os.path.isdir(parent):
        return True, None
    return safe_mkdir(parent)


def read_tail(path: str, n_lines: int) -> List[str]:
    """
    Extract the last lines of a text file without loading it whole.

    Args:
        path: File to read.
        n_lines: Maximum number of lines to return.

    Returns:
        List[str]: Lines without trailing newlines. Empty if the file is
        missing or unreadable.
    """
    if n_lines <= 0 or not os.path.exists(path):
        return []

    # errors='replace' keeps partially corrupted files readable
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as f:
            return [line.rstrip("\n") for line in deque(f, maxlen=n_lines)]
    except OSError:
        return []
