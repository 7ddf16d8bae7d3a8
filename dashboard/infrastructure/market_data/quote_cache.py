"""
In-memory quote cache with a fixed time-to-live.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

V = TypeVar("V")


class QuoteCache(Generic[V]):
    """
    Key → (value, fetched_at) store.

    An entry is readable while ``now - fetched_at < ttl``. Stale entries
    read as absent but stay in place until the next ``set`` overwrites
    them; the key space is bounded by the number of held symbols.
    """

    def __init__(
        self,
        ttl_seconds: float = 10.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._entries: Dict[str, Tuple[V, float]] = {}
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, key: str) -> Optional[V]:
        with self._lock:
            cached = self._entries.get(key)
        if cached is None:
            return None
        value, fetched_at = cached
        if self._clock() - fetched_at >= self._ttl_seconds:
            return None
        return value

    def set(self, key: str, value: V) -> None:
        with self._lock:
            self._entries[key] = (value, self._clock())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
