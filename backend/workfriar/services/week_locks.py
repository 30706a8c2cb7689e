"""In-process locks keyed by (user, week window).

An entry lives only while some caller holds or waits on it.
"""

import threading
from contextlib import contextmanager
from datetime import date

_registry_lock = threading.Lock()
# key -> [lock, number of callers holding or waiting]
_locks: dict[tuple[str, date, date], list] = {}


def _acquire_entry(key) -> threading.Lock:
    with _registry_lock:
        entry = _locks.get(key)
        if entry is None:
            entry = [threading.Lock(), 0]
            _locks[key] = entry
        entry[1] += 1
        return entry[0]


def _release_entry(key) -> None:
    with _registry_lock:
        entry = _locks[key]
        entry[1] -= 1
        if entry[1] == 0:
            del _locks[key]


def active_locks() -> int:
    with _registry_lock:
        return len(_locks)


@contextmanager
def week_lock(user_id, week_start: date, week_end: date):
    """Serialise rejection-ledger reconciliation for one user's week."""
    key = (str(user_id), week_start, week_end)
    lock = _acquire_entry(key)
    try:
        with lock:
            yield
    finally:
        _release_entry(key)
