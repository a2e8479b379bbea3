#!/usr/bin/env python

"""Thread-safe key/value store for values that never go stale.

Both lookup tables used by the estimator (neutral priors by grid
size, Hardy-Weinberg values by frequency) are pure functions of their
key over a small key space, so entries are never evicted.
"""

from typing import Callable, Dict, Generic, Hashable, TypeVar
import threading

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class FrozenCache(Generic[K, V]):
    """Lock-protected dict filled lazily by a factory function.

    The factory runs outside the lock. If two threads race on the
    same missing key both compute it, the first result stored wins
    and is returned to both, so callers always share one instance
    per key. Exceptions from the factory propagate and nothing is
    stored.
    """
    def __init__(self, factory: Callable[[K], V]):
        self._factory = factory
        self._store: Dict[K, V] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)

    def __contains__(self, key: K) -> bool:
        with self._lock:
            return key in self._store

    def get(self, key: K) -> V:
        """Return the cached value for key, computing it if needed."""
        with self._lock:
            if key in self._store:
                return self._store[key]
        value = self._factory(key)
        with self._lock:
            return self._store.setdefault(key, value)
