"""
Semantic Cache Implementation

In-process cache with exact-key lookups and vector similarity search.

Architecture:
    set(key, value, [vector]) → embed key if no vector → EntryStore.insert
    get(key)                  → EntryStore.lookup (lazy expiry) → hit/miss
    get_similar(query)        → embed query if text → k-NN over live snapshot

Concurrency:
    One owner per instance (a single event loop). The embedding call is the
    only suspension point; every store access happens after it without
    suspending, so it is atomic with respect to other coroutines. Timeouts
    and cancellation of the embedding call pass straight through.

Errors:
    Embedding failures propagate unchanged and leave the cache untouched.
    Misses and expirations are never errors.
"""

import logging
import time
from collections.abc import Sequence
from typing import Any

from .config import SemanticCacheConfig, build_config
from .embeddings import EmbedFn, EmbeddingGenerator
from .eviction import EvictionPolicy
from .models import CacheEntry, CacheStatistics, SimilarityResult
from .storage.factory import create_backend
from .storage.interface import StorageBackend
from .store import Clock, EntryStore
from .vector import Vector, as_vector, find_k_nearest

logger = logging.getLogger(__name__)


class SemanticCache:
    """
    Semantic cache with exact-match and similarity lookups.

    Entries expire ``ttl_seconds`` after they are written and are evicted
    per ``eviction_policy`` once ``max_size`` is reached.
    """

    def __init__(
        self,
        config: SemanticCacheConfig | None = None,
        *,
        embed_fn: EmbedFn | None = None,
        storage: StorageBackend | None = None,
        clock: Clock | None = None,
    ):
        """
        Initialize semantic cache.

        Args:
            config: Cache configuration (defaults if None)
            embed_fn: Sync or async text-to-vector function
                (built-in hashing embeddings if None)
            storage: Storage backend instance (created from ``config.backend`` if None)
            clock: Time source in seconds (``time.monotonic`` if None)

        Raises:
            ConfigurationError: If the configured backend cannot be created
        """
        self.config = config if config is not None else SemanticCacheConfig()
        self._clock: Clock = clock or time.monotonic

        if storage is None:
            storage = create_backend(self.config.backend)

        self._store = EntryStore(
            max_size=self.config.max_size,
            policy=self.config.eviction_policy,
            backend=storage,
            clock=self._clock,
        )
        self._embedder = EmbeddingGenerator(
            dimension=self.config.embedding_dimension,
            embed_fn=embed_fn,
        )
        self._stats = CacheStatistics()

        logger.info(
            "Semantic cache initialized: max_size=%d, ttl=%ss, policy=%s, dimension=%d",
            self.config.max_size,
            self.config.ttl_seconds,
            self.eviction_policy.value,
            self.config.embedding_dimension,
            extra={"backend": type(storage).__name__, "default_embeddings": self._embedder.is_default},
        )

    @property
    def storage(self) -> StorageBackend:
        """Get the storage backend."""
        return self._store.backend

    @property
    def eviction_policy(self) -> EvictionPolicy:
        """Get the active eviction policy."""
        return self._store.policy

    def _expires_at(self, created_at: float) -> float | None:
        if self.config.ttl_seconds == 0:
            return None
        return created_at + self.config.ttl_seconds

    async def get(self, key: str) -> Any | None:
        """
        Get value by exact key match.

        Never generates embeddings.

        Args:
            key: Cache key

        Returns:
            Cached value, or None if not found or expired
        """
        entry = self._store.lookup(key)

        if entry is None:
            self._stats.misses += 1
            return None

        self._stats.hits += 1
        return entry.value

    async def set(self, key: str, value: Any, vector: Vector | None = None) -> None:
        """
        Store a value, with an optional precomputed vector.

        Without a vector, the **key** is embedded. Pass a vector to index an
        entry by its value or by some other text.

        Args:
            key: Cache key
            value: Value to cache (any object)
            vector: Precomputed vector of length ``embedding_dimension``

        Raises:
            DimensionMismatchError: If ``vector`` has the wrong length; the
                previous entry for ``key`` is left unchanged
        """
        if vector is not None:
            embedding = as_vector(vector, self.config.embedding_dimension)
        else:
            embedding = await self._embedder.generate(key)

        created_at = self._clock()
        self._store.insert(
            CacheEntry(
                key=key,
                value=value,
                vector=embedding,
                created_at=created_at,
                expires_at=self._expires_at(created_at),
            )
        )

    async def get_similar(
        self,
        query: str | Vector,
        k: int = 5,
        threshold: float | None = None,
    ) -> list[SimilarityResult]:
        """
        Find entries semantically close to a query.

        Args:
            query: Query text (embedded first) or query vector
            k: Maximum number of results
            threshold: Minimum similarity (config default if None); used as
                given, without clamping

        Returns:
            Up to ``k`` matches, most similar first
        """
        if isinstance(query, str):
            query_vector = await self._embedder.generate(query)
        else:
            query_vector = as_vector(query, self.config.embedding_dimension)

        min_similarity = self.config.similarity_threshold if threshold is None else threshold

        results = find_k_nearest(query_vector, self._store.snapshot_live(), k, min_similarity)
        self._stats.similar_hits += len(results)

        logger.debug(
            "Similarity search returned %d result(s)",
            len(results),
            extra={"k": k, "threshold": min_similarity},
        )
        return results

    async def get_many(self, keys: Sequence[str]) -> dict[str, Any]:
        """
        Get multiple values by exact key match.

        Each key counts as one hit or miss.

        Returns:
            Dictionary mapping found keys to values (missing keys are omitted)
        """
        result = {}
        for key in keys:
            entry = self._store.lookup(key)
            if entry is None:
                self._stats.misses += 1
            else:
                self._stats.hits += 1
                result[key] = entry.value
        return result

    async def set_many(self, items: dict[str, Any]) -> int:
        """
        Store multiple values, embedding each key.

        Stops at the first embedding failure; items stored before it remain.

        Returns:
            Number of items stored
        """
        count = 0
        for key, value in items.items():
            await self.set(key, value)
            count += 1
        return count

    def has(self, key: str) -> bool:
        """
        Check if a key is present and live.

        Purges the entry if expired. Does not affect hit/miss statistics.
        """
        return self._store.contains(key)

    def delete(self, key: str) -> bool:
        """
        Delete entry from cache.

        Returns:
            True if entry was deleted, False if not found
        """
        return self._store.remove(key)

    def delete_many(self, keys: Sequence[str]) -> int:
        """
        Delete multiple entries.

        Returns:
            Number of entries deleted
        """
        return sum(1 for key in keys if self._store.remove(key))

    def clear(self) -> None:
        """Remove all entries and reset statistics."""
        size = self._store.backend.size()
        self._store.clear()
        self._stats.reset()
        logger.info(f"Cleared {size} entries from semantic cache")

    def size(self) -> int:
        """Get the number of live entries."""
        return self._store.live_count()

    def reset_stats(self) -> None:
        """Reset hit/miss statistics without touching entries."""
        self._stats.reset()

    def stats(self) -> dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dictionary with hits, misses, similar_hits, size (live entries)
            and hit_rate
        """
        stats_dict = self._stats.to_dict()
        stats_dict["size"] = self._store.live_count()
        return stats_dict


def create_semantic_cache(
    config: SemanticCacheConfig | None = None,
    *,
    embed_fn: EmbedFn | None = None,
    storage: StorageBackend | None = None,
    clock: Clock | None = None,
    **options: Any,
) -> SemanticCache:
    """
    Create a semantic cache instance.

    Keyword options override fields of ``config`` (or of the defaults).

    Example:
        >>> cache = create_semantic_cache(max_size=100, ttl_seconds=60)

    Raises:
        ConfigurationError: If the resulting configuration is invalid
    """
    if options:
        base = config.model_dump() if config is not None else {}
        config = build_config(**{**base, **options})

    return SemanticCache(config, embed_fn=embed_fn, storage=storage, clock=clock)
