from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class MemberLocks:
    """Per-member mutual exclusion for one process.

    Entries are reference counted so idle members do not accumulate locks.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[int, threading.Lock] = {}
        self._users: dict[int, int] = {}

    @contextmanager
    def hold(self, member_id: int) -> Iterator[None]:
        with self._guard:
            lock = self._locks.setdefault(member_id, threading.Lock())
            self._users[member_id] = self._users.get(member_id, 0) + 1

        try:
            with lock:
                yield
        finally:
            with self._guard:
                remaining = self._users[member_id] - 1
                if remaining:
                    self._users[member_id] = remaining
                else:
                    del self._users[member_id]
                    del self._locks[member_id]

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)
