"""Content-addressed result store with one in-flight producer per key."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")

CACHE_PENDING = "pending"
CACHE_READY = "ready"


@dataclass
class CacheEntry(Generic[V]):
    """Cache slot; ``state`` only ever moves from pending to ready."""

    key: str
    state: str
    value: V | None = None
    future: Future | None = field(default=None, repr=False)


class ResultCache(Generic[V]):
    """Memoize expensive results by fingerprint.

    ``produce`` runs at most once per pending episode of a key: the pending
    marker is inserted under the lock before the producer starts, and callers
    that find it wait on the same future. Failures are not cached.

    ``max_entries`` bounds the number of ready entries with LRU eviction;
    ``None`` keeps every result for the lifetime of the instance.
    """

    def __init__(self, max_entries: int | None = None, *, name: str = "results") -> None:
        if max_entries is not None and max_entries <= 0:
            raise ValueError("max_entries must be >= 1 or None")
        self.name = name
        self.max_entries = max_entries
        self._entries: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._lock = threading.Lock()

    def get_or_compute(self, key: str, produce: Callable[[], V]) -> V:
        """Return the ready value for ``key`` or produce it exactly once."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.state == CACHE_READY:
                self._entries.move_to_end(key)
                return entry.value  # type: ignore[return-value]
            if entry is not None:
                waiter = entry.future
            else:
                waiter = None
                entry = CacheEntry(key=key, state=CACHE_PENDING, future=Future())
                self._entries[key] = entry

        if waiter is not None:
            logger.debug("%s: awaiting in-flight result for %s", self.name, key)
            return waiter.result()

        future = entry.future
        assert future is not None
        logger.debug("%s: producing %s", self.name, key)
        try:
            value = produce()
        except BaseException as exc:
            with self._lock:
                if self._entries.get(key) is entry:
                    del self._entries[key]
            logger.debug("%s: producer for %s failed: %s", self.name, key, exc)
            future.set_exception(exc)
            raise

        with self._lock:
            # An invalidation during production detaches the entry.
            if self._entries.get(key) is entry:
                entry.value = value
                entry.state = CACHE_READY
                entry.future = None
                self._entries.move_to_end(key)
                self._evict_locked()
        future.set_result(value)
        return value

    def _evict_locked(self) -> None:
        """Drop least-recently-used ready entries beyond ``max_entries``."""
        if self.max_entries is None:
            return
        ready = [key for key, entry in self._entries.items() if entry.state == CACHE_READY]
        for key in ready[: max(0, len(ready) - self.max_entries)]:
            del self._entries[key]
            logger.debug("%s: evicted %s", self.name, key)

    def get(self, key: str) -> V | None:
        """Return the ready value for ``key`` without producing."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or entry.state != CACHE_READY:
                return None
            self._entries.move_to_end(key)
            return entry.value

    def state_of(self, key: str) -> str | None:
        """Return ``"pending"``, ``"ready"``, or ``None`` when absent."""
        with self._lock:
            entry = self._entries.get(key)
            return entry.state if entry is not None else None

    def invalidate(self, key: str) -> bool:
        """Remove ``key``; return whether an entry existed."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Remove every entry."""
        with self._lock:
            self._entries.clear()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = [
    "CACHE_PENDING",
    "CACHE_READY",
    "CacheEntry",
    "ResultCache",
]
