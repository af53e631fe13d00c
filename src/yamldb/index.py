"""In-memory ordered index over stored keys."""

from __future__ import annotations

import bisect
import functools
import threading
from typing import Any, Callable, Iterable

from yamldb.sorting import OrderFunc, order_alphabetically


def _sort_key(less: OrderFunc) -> Callable[[str], Any]:
    def compare(a: str, b: str) -> int:
        if less(a, b):
            return -1
        if less(b, a):
            return 1
        # ties under less fall back to string order
        return (a > b) - (a < b)

    return functools.cmp_to_key(compare)


class OrderedIndex:
    """Sorted set of keys ordered by a less-than function.

    Keys that compare equal under ``less`` but differ as strings are all kept
    and ordered among themselves by plain string comparison.
    """

    def __init__(self, less: OrderFunc | None = None) -> None:
        self.less = less or order_alphabetically
        self._key = _sort_key(self.less)
        self._keys: list[str] = []
        self._members: set[str] = set()
        self._lock = threading.RLock()

    def initialize(self, keys: Iterable[str]) -> None:
        """Replace the index contents with ``keys``."""
        members = set(keys)
        with self._lock:
            self._members = members
            self._keys = sorted(members, key=self._key)

    def insert(self, key: str) -> None:
        with self._lock:
            if key in self._members:
                return
            bisect.insort_right(self._keys, key, key=self._key)
            self._members.add(key)

    def delete(self, key: str) -> None:
        with self._lock:
            if key not in self._members:
                return
            del self._keys[bisect.bisect_left(self._keys, self._key(key), key=self._key)]
            self._members.discard(key)

    def clear(self) -> None:
        with self._lock:
            self._keys = []
            self._members = set()

    def keys(self, start_after: str, count: int) -> list[str]:
        """Return up to ``count`` keys ordered strictly after ``start_after``.

        An empty ``start_after`` starts from the first key.
        """
        if count <= 0:
            raise ValueError(f"count must be positive, got {count}")
        with self._lock:
            if start_after:
                start = bisect.bisect_right(self._keys, self._key(start_after), key=self._key)
            else:
                start = 0
            return self._keys[start : start + count]

    def __contains__(self, key: object) -> bool:
        return key in self._members

    def __len__(self) -> int:
        return len(self._keys)
