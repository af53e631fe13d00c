"""Size-bounded in-memory cache of file contents."""

from __future__ import annotations

import threading
from collections import OrderedDict


class BoundedCache:
    """LRU cache of raw payloads, bounded by the total number of bytes held.

    A ``max_bytes`` of 0 disables the cache entirely.
    """

    def __init__(self, max_bytes: int = 0) -> None:
        if max_bytes < 0:
            raise ValueError(f"max_bytes must not be negative, got {max_bytes}")
        self.max_bytes = max_bytes
        self.size = 0
        self._entries: OrderedDict[str, bytes] = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> bytes | None:
        with self._lock:
            data = self._entries.get(key)
            if data is not None:
                self._entries.move_to_end(key)
            return data

    def put(self, key: str, data: bytes) -> bool:
        """Cache ``data`` under ``key``; returns False when it can't fit."""
        with self._lock:
            self._discard(key)
            if not self.max_bytes or len(data) > self.max_bytes:
                return False
            while self.size + len(data) > self.max_bytes:
                _, evicted = self._entries.popitem(last=False)
                self.size -= len(evicted)
            self._entries[key] = data
            self.size += len(data)
            return True

    def pop(self, key: str) -> None:
        with self._lock:
            self._discard(key)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.size = 0

    def _discard(self, key: str) -> None:
        data = self._entries.pop(key, None)
        if data is not None:
            self.size -= len(data)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
