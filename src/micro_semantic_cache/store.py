"""
Semantic Cache Entry Store

Owns the cache entries: size cap, eviction, and lazy TTL expiry on top of a
pluggable storage backend.

Expiry is checked on access, never by a background sweep. Any read that meets
an expired entry (lookup, contains, similarity snapshot, size) purges it.

Live counting is amortized: every entry shares the same TTL, so the order in
which entries are written is also the order in which they expire. An ordered
expiry queue lets ``purge_expired`` stop at the first entry that is still
live instead of scanning the whole store.
"""

import logging
import time
from collections import OrderedDict
from collections.abc import Callable

from .eviction import EvictionOrder, EvictionPolicy, create_eviction_order
from .models import CacheEntry
from .storage.backends.memory import InMemoryBackend
from .storage.interface import StorageBackend

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class EntryStore:
    """
    Size- and TTL-bounded entry store.

    Not synchronized: the owning cache must not interleave calls from
    several threads. No method suspends, so under asyncio every call is
    atomic with respect to other coroutines.
    """

    def __init__(
        self,
        max_size: int = 1000,
        policy: EvictionPolicy | str = EvictionPolicy.LRU,
        backend: StorageBackend | None = None,
        clock: Clock = time.monotonic,
    ):
        """
        Initialize entry store.

        Args:
            max_size: Maximum number of entries before eviction
            policy: Eviction policy ("lru" or "fifo")
            backend: Storage backend (fresh in-memory backend if None)
            clock: Time source in seconds, used for expiry checks
        """
        if max_size < 1:
            raise ValueError("max_size must be >= 1")

        self.max_size = max_size
        self.policy = EvictionPolicy(policy)
        self.backend = backend if backend is not None else InMemoryBackend()
        self.clock = clock

        self._order: EvictionOrder = create_eviction_order(self.policy, max_size, self._on_evict)
        # key -> expires_at, oldest expiry first; never-expiring entries are not queued
        self._expiry: OrderedDict[str, float] = OrderedDict()

        if self.backend.size() > 0:
            self._adopt_existing_entries()

    def _adopt_existing_entries(self) -> None:
        """Track entries already present in a pre-populated backend."""
        existing = sorted(self.backend.values(), key=lambda e: e.created_at)

        for entry in existing:
            self._order.record(entry.key)

        for entry in sorted(existing, key=lambda e: e.expires_at or 0.0):
            if entry.expires_at is not None and self.backend.has(entry.key):
                self._expiry[entry.key] = entry.expires_at

        logger.debug(
            "Adopted %d existing entries from backend",
            self.backend.size(),
            extra={"policy": self.policy.value, "max_size": self.max_size},
        )

    def _on_evict(self, key: str) -> None:
        self.backend.delete(key)
        self._expiry.pop(key, None)
        logger.debug("Evicted entry", extra={"key": key, "policy": self.policy.value})

    def _purge(self, key: str) -> None:
        self.backend.delete(key)
        self._order.discard(key)
        self._expiry.pop(key, None)
        logger.debug("Purged expired entry", extra={"key": key})

    def lookup(self, key: str) -> CacheEntry | None:
        """
        Get a live entry by key.

        Purges the entry if it has expired. Under LRU a hit marks the entry
        most recently used.

        Returns:
            The entry if present and live, None otherwise
        """
        entry = self.backend.get(key)
        if entry is None:
            return None

        if entry.is_expired(self.clock()):
            self._purge(key)
            return None

        self._order.touch(key)
        return entry

    def contains(self, key: str) -> bool:
        """Check if a live entry exists, with the same side effects as lookup()."""
        return self.lookup(key) is not None

    def insert(self, entry: CacheEntry) -> None:
        """
        Store an entry.

        An existing key is overwritten in place: no size change, no eviction.
        A new key in a full store first purges expired entries, then evicts
        one entry per policy if still full.
        """
        key = entry.key
        is_new = not self.backend.has(key)

        if is_new and self.backend.size() >= self.max_size:
            self.purge_expired()

        # May evict another key via _on_evict when the store is full
        self._order.record(key)
        self.backend.set(key, entry)

        self._expiry.pop(key, None)
        if entry.expires_at is not None:
            self._expiry[key] = entry.expires_at

    def remove(self, key: str) -> bool:
        """
        Remove an entry by key.

        Returns:
            True if an entry existed and was removed
        """
        existed = self.backend.delete(key)
        self._order.discard(key)
        self._expiry.pop(key, None)
        return existed

    def clear(self) -> None:
        """Remove all entries."""
        self.backend.clear()
        self._order.clear()
        self._expiry.clear()

    def purge_expired(self) -> int:
        """
        Remove every expired entry.

        Returns:
            Number of entries purged
        """
        now = self.clock()
        purged = 0

        while self._expiry:
            key, expires_at = next(iter(self._expiry.items()))
            if now < expires_at:
                break

            entry = self.backend.get(key)
            if entry is not None and entry.is_expired(now):
                self._purge(key)
                purged += 1
            else:
                self._expiry.pop(key, None)

        return purged

    def snapshot_live(self) -> list[CacheEntry]:
        """
        Take a point-in-time list of live entries.

        Entries come in backend iteration order. Expired entries met on the
        way are purged. Does not count as a read for LRU purposes.
        """
        now = self.clock()
        live: list[CacheEntry] = []

        for key, entry in list(self.backend.entries()):
            if entry.is_expired(now):
                self._purge(key)
            else:
                live.append(entry)

        return live

    def live_count(self) -> int:
        """Count live entries, purging expired ones first."""
        self.purge_expired()
        return self.backend.size()

    def __len__(self) -> int:
        return self.live_count()
