"""
Tests for the Entry Store

Covers lookups with lazy expiry, insertion with eviction, live counting,
similarity snapshots and adopting a pre-populated backend.
"""

import time
from typing import Any

import pytest

from micro_semantic_cache.eviction import EvictionPolicy
from micro_semantic_cache.models import CacheEntry
from micro_semantic_cache.storage.backends.memory import InMemoryBackend
from micro_semantic_cache.store import EntryStore

TTL = 10.0


def make_entry(clock: Any, key: str, ttl: float | None = TTL, value: Any = None) -> CacheEntry:
    now = clock()
    return CacheEntry(
        key=key,
        value=value if value is not None else f"value-{key}",
        vector=[1.0, 0.0, 0.0],
        created_at=now,
        expires_at=now + ttl if ttl is not None else None,
    )


class TestEntryStoreBasics:
    """Test lookup, insert, remove and clear."""

    @pytest.fixture
    def store(self, clock) -> EntryStore:
        return EntryStore(max_size=3, clock=clock)

    def test_initialization(self, clock):
        """Defaults: LRU policy and a fresh in-memory backend."""
        store = EntryStore(clock=clock)

        assert store.max_size == 1000
        assert store.policy == EvictionPolicy.LRU
        assert isinstance(store.backend, InMemoryBackend)
        assert len(store) == 0

    def test_default_clock_is_monotonic(self):
        """Expiry uses a clock that system time changes cannot move backwards."""
        store = EntryStore()

        assert store.clock is time.monotonic

    def test_invalid_max_size(self):
        """max_size below 1 is rejected."""
        with pytest.raises(ValueError):
            EntryStore(max_size=0)

    def test_insert_and_lookup(self, store, clock):
        """Inserted entries can be looked up."""
        entry = make_entry(clock, "key1")
        store.insert(entry)

        assert store.lookup("key1") is entry
        assert store.contains("key1") is True

    def test_lookup_missing(self, store):
        """Missing keys return None."""
        assert store.lookup("missing") is None
        assert store.contains("missing") is False

    def test_overwrite_in_place(self, store, clock):
        """Overwriting replaces the entry without growing the store."""
        store.insert(make_entry(clock, "key1", value="old"))
        store.insert(make_entry(clock, "key1", value="new"))

        assert len(store) == 1
        assert store.lookup("key1").value == "new"

    def test_remove(self, store, clock):
        """remove() reports whether an entry existed."""
        store.insert(make_entry(clock, "key1"))

        assert store.remove("key1") is True
        assert store.remove("key1") is False
        assert store.lookup("key1") is None

    def test_remove_frees_slot(self, store, clock):
        """A removed entry's slot is reused without eviction."""
        for key in ("key1", "key2", "key3"):
            store.insert(make_entry(clock, key))

        store.remove("key2")
        store.insert(make_entry(clock, "key4"))

        assert store.contains("key1") is True
        assert store.contains("key3") is True
        assert store.contains("key4") is True

    def test_clear(self, store, clock):
        """clear() removes everything."""
        for key in ("key1", "key2"):
            store.insert(make_entry(clock, key))

        store.clear()

        assert len(store) == 0
        assert store.backend.size() == 0
        assert store.lookup("key1") is None

    def test_empty_and_unicode_keys(self, store, clock):
        """Empty and non-ASCII keys are ordinary keys."""
        store.insert(make_entry(clock, ""))
        store.insert(make_entry(clock, "你好世界"))

        assert store.contains("") is True
        assert store.contains("你好世界") is True


class TestEntryStoreExpiry:
    """Test lazy TTL expiry."""

    @pytest.fixture
    def store(self, clock) -> EntryStore:
        return EntryStore(max_size=10, clock=clock)

    def test_expired_lookup_purges(self, store, clock):
        """An expired entry is absent and physically removed when looked up."""
        store.insert(make_entry(clock, "key1"))
        clock.advance(TTL + 1)

        assert store.backend.size() == 1  # lingers until touched
        assert store.lookup("key1") is None
        assert store.backend.size() == 0

    def test_expiry_boundary(self, store, clock):
        """An entry is expired exactly at its expiry time."""
        store.insert(make_entry(clock, "key1"))

        clock.advance(TTL - 0.001)
        assert store.contains("key1") is True

        clock.advance(0.001)
        assert store.contains("key1") is False

    def test_no_expiry(self, store, clock):
        """Entries without expires_at never expire."""
        store.insert(make_entry(clock, "forever", ttl=None))
        clock.advance(10**9)

        assert store.contains("forever") is True
        assert store.purge_expired() == 0

    def test_live_count_excludes_expired(self, store, clock):
        """Live count drops expired entries without any explicit read."""
        store.insert(make_entry(clock, "key1"))
        clock.advance(5)
        store.insert(make_entry(clock, "key2"))

        assert len(store) == 2

        clock.advance(6)  # key1 expired, key2 live
        assert store.live_count() == 1
        assert store.backend.size() == 1
        assert store.contains("key2") is True

    def test_purge_expired(self, store, clock):
        """purge_expired() removes every expired entry and reports the count."""
        for key in ("a", "b", "c"):
            store.insert(make_entry(clock, key))
            clock.advance(1)
        store.insert(make_entry(clock, "d", ttl=None))

        clock.advance(TTL)  # a, b and c expired

        assert store.purge_expired() == 3
        assert list(store.backend.keys()) == ["d"]

    def test_overwrite_refreshes_expiry(self, store, clock):
        """Re-setting a key gives it a new lifetime."""
        store.insert(make_entry(clock, "key1"))
        clock.advance(8)
        store.insert(make_entry(clock, "key1"))
        clock.advance(8)

        assert store.contains("key1") is True
        assert len(store) == 1

    def test_snapshot_excludes_and_purges_expired(self, store, clock):
        """Snapshots contain live entries only, in insertion order."""
        store.insert(make_entry(clock, "old"))
        clock.advance(5)
        store.insert(make_entry(clock, "new1"))
        store.insert(make_entry(clock, "new2"))
        clock.advance(6)

        snapshot = store.snapshot_live()

        assert [entry.key for entry in snapshot] == ["new1", "new2"]
        assert store.backend.has("old") is False

    def test_snapshot_is_point_in_time(self, store, clock):
        """Mutating the store after a snapshot does not change the snapshot."""
        store.insert(make_entry(clock, "key1"))
        snapshot = store.snapshot_live()

        store.insert(make_entry(clock, "key2"))
        store.remove("key1")

        assert [entry.key for entry in snapshot] == ["key1"]


class TestEntryStoreEviction:
    """Test size-bounded eviction."""

    def test_fifo_evicts_oldest_insert(self, clock):
        """FIFO evicts the first key written, even after reads."""
        store = EntryStore(max_size=3, policy="fifo", clock=clock)
        for key in ("key1", "key2", "key3"):
            store.insert(make_entry(clock, key))

        store.lookup("key1")
        store.insert(make_entry(clock, "key4"))

        assert len(store) == 3
        assert store.contains("key1") is False
        assert store.contains("key4") is True

    def test_lru_evicts_least_recently_used(self, clock):
        """LRU keeps recently read keys."""
        store = EntryStore(max_size=3, policy="lru", clock=clock)
        for key in ("key1", "key2", "key3"):
            store.insert(make_entry(clock, key))

        store.lookup("key1")
        store.insert(make_entry(clock, "key4"))

        assert store.backend.has("key1") is True
        assert store.backend.has("key2") is False
        assert store.backend.has("key3") is True
        assert store.backend.has("key4") is True

    def test_lru_contains_counts_as_touch(self, clock):
        """has-style checks also refresh recency under LRU."""
        store = EntryStore(max_size=2, policy="lru", clock=clock)
        store.insert(make_entry(clock, "key1"))
        store.insert(make_entry(clock, "key2"))

        store.contains("key1")
        store.insert(make_entry(clock, "key3"))

        assert store.backend.has("key1") is True
        assert store.backend.has("key2") is False

    def test_snapshot_does_not_touch(self, clock):
        """Similarity snapshots do not refresh LRU recency."""
        store = EntryStore(max_size=2, policy="lru", clock=clock)
        store.insert(make_entry(clock, "key1"))
        store.insert(make_entry(clock, "key2"))

        store.snapshot_live()
        store.insert(make_entry(clock, "key3"))

        assert store.backend.has("key1") is False

    @pytest.mark.parametrize("policy", ["lru", "fifo"])
    def test_overwrite_never_evicts(self, clock, policy):
        """Overwriting an existing key in a full store evicts nothing."""
        store = EntryStore(max_size=2, policy=policy, clock=clock)
        store.insert(make_entry(clock, "key1"))
        store.insert(make_entry(clock, "key2"))

        store.insert(make_entry(clock, "key1", value="updated"))

        assert len(store) == 2
        assert store.lookup("key1").value == "updated"
        assert store.contains("key2") is True

    def test_full_store_purges_expired_before_evicting(self, clock):
        """Expired entries make room before any live entry is evicted."""
        store = EntryStore(max_size=2, policy="fifo", clock=clock)
        store.insert(make_entry(clock, "stale"))
        clock.advance(5)
        store.insert(make_entry(clock, "fresh"))
        clock.advance(6)  # stale expired

        store.insert(make_entry(clock, "newest"))

        assert store.backend.has("stale") is False
        assert store.contains("fresh") is True
        assert store.contains("newest") is True

    def test_max_size_plus_one(self, clock):
        """Inserting max_size + 1 distinct keys keeps exactly max_size."""
        store = EntryStore(max_size=5, policy="fifo", clock=clock)
        for i in range(6):
            store.insert(make_entry(clock, f"key{i}"))

        assert len(store) == 5
        assert store.contains("key0") is False


class TestEntryStoreExistingBackend:
    """Test adopting entries already present in a backend."""

    def test_adopts_entries_in_creation_order(self, clock):
        """Pre-existing entries are evicted oldest first."""
        backend = InMemoryBackend()
        for key, created_at in (("newer", 20.0), ("oldest", 10.0), ("newest", 30.0)):
            backend.set(key, CacheEntry(key=key, value=key, vector=[1.0], created_at=created_at))

        store = EntryStore(max_size=3, policy="fifo", backend=backend, clock=clock)
        store.insert(make_entry(clock, "incoming"))

        assert backend.has("oldest") is False
        assert set(backend.keys()) == {"newer", "newest", "incoming"}

    def test_trims_oversized_backend(self, clock):
        """A backend holding more than max_size entries is trimmed."""
        backend = InMemoryBackend()
        for i in range(4):
            backend.set(f"key{i}", CacheEntry(key=f"key{i}", value=i, vector=[1.0], created_at=float(i)))

        store = EntryStore(max_size=2, policy="fifo", backend=backend, clock=clock)

        assert len(store) == 2
        assert set(backend.keys()) == {"key2", "key3"}

    def test_adopted_entries_expire(self, clock):
        """Expiry of adopted entries is tracked."""
        backend = InMemoryBackend()
        backend.set("old", CacheEntry(key="old", value=1, vector=[1.0], created_at=0.0, expires_at=clock() + 1))

        store = EntryStore(max_size=10, backend=backend, clock=clock)
        clock.advance(2)

        assert store.live_count() == 0
