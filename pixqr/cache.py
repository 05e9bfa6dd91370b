"""Bounded FIFO cache for rendered QR images."""
from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Callable, Generic, TypeVar

from .monitoring import record_cache_eviction, record_cache_lookup

T = TypeVar("T")

DEFAULT_CAPACITY = 100

logger = logging.getLogger("pixqr.cache")


class RenderCache(Generic[T]):
    """Map payload strings to rendered output, evicting oldest insertions first.

    Hits do not refresh an entry's position. Render failures propagate to the
    caller and leave the cache untouched, so the next call retries.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self._capacity = capacity
        self._entries: dict[str, T] = {}
        self._order: deque[str] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, payload: object) -> bool:
        return payload in self._entries

    def get_or_render(self, payload: str, render: Callable[[str], T]) -> T:
        with self._lock:
            if payload in self._entries:
                record_cache_lookup(hit=True)
                return self._entries[payload]
            record_cache_lookup(hit=False)

            output = render(payload)

            if len(self._entries) >= self._capacity:
                oldest = self._order.popleft()
                del self._entries[oldest]
                record_cache_eviction()
                logger.debug("render cache eviction", extra={"capacity": self._capacity})
            self._entries[payload] = output
            self._order.append(payload)
            return output

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._order.clear()
