from __future__ import annotations

"""
Registry Lock Strategies.

The registry guards two kinds of shared state: the name -> writer mapping
and each writer's fields plus its file. A strategy hands out the lock for
each. Lock acquisition order is always: name guard, then mapping guard.

- GlobalLockStrategy: one re-entrant lock for everything. All registry
  operations are totally ordered, including writes to unrelated loggers.
- PerNameLockStrategy: one re-entrant lock per registered logger name plus
  a mapping lock. Writes to different loggers proceed in parallel;
  operations on the same name remain totally ordered.

Registry operations enter a name through hold(), which re-checks after
acquisition that the lock it waited on is still the one guarding the name.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class LockStrategy:
    """Base interface for registry lock strategies."""

    def mapping_guard(self) -> threading.RLock:
        """Lock guarding the name -> writer mapping."""
        raise NotImplementedError

    def name_guard(self, name: str) -> threading.RLock:
        """Lock currently guarding one logger's writer and file."""
        raise NotImplementedError

    def add_name(self, name: str) -> None:
        """Called under the mapping guard once a name is registered."""

    def discard_name(self, name: str) -> None:
        """Called under the mapping guard once a name is removed."""

    @contextmanager
    def hold(self, name: str) -> Iterator[None]:
        """
        Hold the guard of a name for the duration of the block.

        The guard of a name changes when it is registered or removed, so a
        lock obtained before that change is released and the current one
        is taken instead.
        """
        while True:
            lock = self.name_guard(name)
            with lock:
                if self.name_guard(name) is lock:
                    yield
                    return


class GlobalLockStrategy(LockStrategy):
    """Single process-wide re-entrant lock."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    def mapping_guard(self) -> threading.RLock:
        return self._lock

    def name_guard(self, name: str) -> threading.RLock:
        return self._lock


class PerNameLockStrategy(LockStrategy):
    """
    Sharded locking: a lock per registered logger name.

    A name lock is created when the name is registered and dropped when it
    is removed. Names that are not registered share the mapping lock, so
    calls with arbitrary unknown names never grow the lock table.
    """

    def __init__(self) -> None:
        self._mapping_lock = threading.RLock()
        self._name_locks: Dict[str, threading.RLock] = {}

    def mapping_guard(self) -> threading.RLock:
        return self._mapping_lock

    def name_guard(self, name: str) -> threading.RLock:
        with self._mapping_lock:
            return self._name_locks.get(name, self._mapping_lock)

    def add_name(self, name: str) -> None:
        with self._mapping_lock:
            self._name_locks.setdefault(name, threading.RLock())

    def discard_name(self, name: str) -> None:
        with self._mapping_lock:
            self._name_locks.pop(name, None)

    def __len__(self) -> int:
        with self._mapping_lock:
            return len(self._name_locks)
