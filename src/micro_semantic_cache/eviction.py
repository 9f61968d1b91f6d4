"""
Semantic Cache Eviction - LRU or FIFO

Tracks the order in which keys leave a full cache:
- FIFO: evict the oldest write, reads never reorder
- LRU: evict the least recently touched key, reads and writes both touch

Uses cachetools for O(1) ordering. The trackers hold keys only (values are
``None``); the entries themselves live in a storage backend. When cachetools
evicts a key to make room, the tracker reports it through ``on_evict`` so the
entry store can drop the entry from its backend.

A write to a key that is already tracked never evicts; it only moves that key
to the newest position (the entry gets a fresh creation time on overwrite).
"""

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from cachetools import FIFOCache, LRUCache

logger = logging.getLogger(__name__)

EvictCallback = Callable[[str], None]


class EvictionPolicy(str, Enum):
    """Supported eviction policies."""

    LRU = "lru"
    FIFO = "fifo"


class _EvictionOrderMixin:
    """Shared behavior for the cachetools-based order trackers."""

    _on_evict: EvictCallback | None

    def popitem(self) -> tuple[str, Any]:
        """Evict the next key per policy and report it."""
        key, value = super().popitem()  # type: ignore[misc]
        if self._on_evict is not None:
            self._on_evict(key)
        return key, value

    def clear(self) -> None:
        """Drop all keys without reporting them as evictions."""
        for key in list(self):  # type: ignore[attr-defined]
            del self[key]  # type: ignore[attr-defined]

    def record(self, key: str) -> None:
        """Record a write of ``key``; may evict another key when full."""
        self[key] = None  # type: ignore[index]

    def discard(self, key: str) -> None:
        """Forget ``key`` if tracked (not an eviction)."""
        self.pop(key, None)  # type: ignore[attr-defined]

    def touch(self, key: str) -> None:
        """Record a successful read of ``key``."""
        pass


class FIFOEvictionOrder(_EvictionOrderMixin, FIFOCache):
    """Insertion-order tracker: reads never change eviction order."""

    def __init__(self, maxsize: int, on_evict: EvictCallback | None = None):
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict


class LRUEvictionOrder(_EvictionOrderMixin, LRUCache):
    """Access-order tracker: every read or write marks the key most recently used."""

    def __init__(self, maxsize: int, on_evict: EvictCallback | None = None):
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict

    def touch(self, key: str) -> None:
        """Mark ``key`` most recently used."""
        # LRUCache reorders on item access
        self.get(key)


EvictionOrder = FIFOEvictionOrder | LRUEvictionOrder


def create_eviction_order(
    policy: EvictionPolicy | str,
    maxsize: int,
    on_evict: EvictCallback | None = None,
) -> EvictionOrder:
    """
    Create the order tracker for an eviction policy.

    Args:
        policy: "lru" or "fifo"
        maxsize: Number of keys kept before eviction
        on_evict: Called with each evicted key

    Returns:
        Order tracker for the policy
    """
    policy = EvictionPolicy(policy)

    if policy == EvictionPolicy.FIFO:
        return FIFOEvictionOrder(maxsize, on_evict)
    return LRUEvictionOrder(maxsize, on_evict)
