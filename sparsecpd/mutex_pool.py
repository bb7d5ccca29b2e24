"""A fixed pool of locks shared among arbitrarily many integer ids."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager

DEFAULT_NUM_LOCKS = 1024
DEFAULT_LOCK_PAD = 16


def translate_id(id: int, num_locks: int, pad_size: int) -> int:
    """Map an arbitrary id (e.g. a matrix row) to a padded lock slot."""
    return (id % num_locks) * pad_size


class MutexPool:
    """Locks keyed by integer id; ids equal modulo ``num_locks`` share a lock."""

    def __init__(
        self, num_locks: int = DEFAULT_NUM_LOCKS, pad_size: int = DEFAULT_LOCK_PAD
    ) -> None:
        if num_locks < 1:
            raise ValueError("num_locks must be positive")
        if pad_size < 1:
            raise ValueError("pad_size must be positive")
        self.num_locks = num_locks
        self.pad_size = pad_size
        self._locks = {
            translate_id(slot, num_locks, pad_size): threading.Lock()
            for slot in range(num_locks)
        }

    def translate_id(self, id: int) -> int:
        """Return the lock slot that guards ``id``."""
        return translate_id(id, self.num_locks, self.pad_size)

    def acquire(self, id: int) -> None:
        """Block until the lock guarding ``id`` is held."""
        self._locks[self.translate_id(id)].acquire()

    def release(self, id: int) -> None:
        """Release the lock guarding ``id``."""
        self._locks[self.translate_id(id)].release()

    @contextmanager
    def lock(self, id: int) -> Iterator[None]:
        """Hold the lock guarding ``id`` for the duration of a ``with`` block."""
        self.acquire(id)
        try:
            yield
        finally:
            self.release(id)