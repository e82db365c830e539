import threading
from contextlib import contextmanager

from shiptrack.exceptions import ResourceBusy


class KeyedLock:
    """
    Registry of re-entrant locks, one per key. Several keys are always
    taken in sorted order so two callers locking overlapping sets cannot
    deadlock.
    """

    def __init__(self, name):
        self.name = name
        self._guard = threading.Lock()
        self._locks = {}

    def _lock_for(self, key):
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    @contextmanager
    def hold(self, *keys, timeout=None):
        held = []
        try:
            for key in sorted(set(keys), key=str):
                lock = self._lock_for(key)
                if not lock.acquire(timeout=-1 if timeout is None else timeout):
                    raise ResourceBusy(f'{self.name} lock on {key} not acquired within {timeout}s')
                held.append(lock)
            yield
        finally:
            for lock in reversed(held):
                lock.release()


# Process wide registries
booking_locks = KeyedLock('booking')
inventory_locks = KeyedLock('inventory')
