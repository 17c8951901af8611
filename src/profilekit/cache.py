"""In-memory artifact cache with a flat time-to-live."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable
import threading
import time

@dataclass
class CacheEntry:
    artifact: Any
    created_at: float
    hits: int = 0

class TTLCache:
    """Maps config hashes to generated artifacts.

    Stale entries are ignored by ``get`` but stay in the map; only an explicit
    ``capacity`` ever trims it.
    """

    def __init__(self, ttl: float, capacity: int | None = None, clock: Callable[[], float] = time.monotonic) -> None:
        self.ttl = ttl
        self.capacity = capacity
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def _fresh(self, entry: CacheEntry, now: float) -> bool:
        return now - entry.created_at <= self.ttl

    def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or not self._fresh(entry, self._clock()):
                return None
            entry.hits += 1
            return entry

    def put(self, key: str, artifact: Any) -> None:
        with self._lock:
            self._entries[key] = CacheEntry(artifact=artifact, created_at=self._clock(), hits=1)
            if self.capacity is not None and len(self._entries) > self.capacity:
                self._trim()

    def _trim(self) -> None:
        now = self._clock()
        keep = sorted(
            ((k, e) for k, e in self._entries.items() if self._fresh(e, now)),
            key=lambda item: item[1].hits,
            reverse=True,
        )[: self.capacity]
        self._entries = dict(keep)

    def size(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
