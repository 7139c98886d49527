from __future__ import annotations

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class PathLockRegistry:
    """
    Hands out one re-entrant lock per resolved file path, so a read-modify-write
    on one kind file never blocks another kind.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[Path, threading.RLock] = {}

    def lock_for(self, path: Path) -> threading.RLock:
        resolved = path.resolve()
        with self._guard:
            return self._locks.setdefault(resolved, threading.RLock())

    @contextmanager
    def hold(self, path: Path) -> Iterator[None]:
        with self.lock_for(path):
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


GLOBAL_PATH_LOCKS = PathLockRegistry()
