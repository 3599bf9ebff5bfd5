import threading
from contextlib import contextmanager
from typing import Iterator


class AccountLockRegistry:
    """Hands out one mutex per user id, created on first use.

    Mutations on the same user serialize on that user's lock; different users
    never contend with each other.
    """

    def __init__(self):
        self._locks: dict[int, threading.Lock] = {}
        self._guard = threading.Lock()

    def lock_for(self, user_id: int) -> threading.Lock:
        lock = self._locks.get(user_id)
        if lock is not None:
            return lock
        with self._guard:
            return self._locks.setdefault(user_id, threading.Lock())

    @contextmanager
    def hold(self, user_id: int) -> Iterator[None]:
        lock = self.lock_for(user_id)
        with lock:
            yield

    def __len__(self) -> int:
        return len(self._locks)
