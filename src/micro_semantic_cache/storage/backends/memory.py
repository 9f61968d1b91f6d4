"""
Micro Semantic Cache - Memory Storage Backend

In-memory storage backend on a plain dict. Suitable for single-process use;
iteration follows insertion order.
"""

import logging
from collections.abc import Iterator

from ...models import CacheEntry
from ..interface import StorageBackend

logger = logging.getLogger(__name__)


class InMemoryBackend(StorageBackend):
    """In-memory storage backend with O(1) get/set/delete."""

    def __init__(self) -> None:
        self._store: dict[str, CacheEntry] = {}

    def get(self, key: str) -> CacheEntry | None:
        return self._store.get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        self._store[key] = entry

    def has(self, key: str) -> bool:
        return key in self._store

    def delete(self, key: str) -> bool:
        if key in self._store:
            del self._store[key]
            return True
        return False

    def clear(self) -> None:
        size = len(self._store)
        self._store.clear()
        logger.debug("Cleared %d entries from memory backend", size)

    def size(self) -> int:
        return len(self._store)

    def keys(self) -> Iterator[str]:
        return iter(self._store.keys())

    def values(self) -> Iterator[CacheEntry]:
        return iter(self._store.values())

    def entries(self) -> Iterator[tuple[str, CacheEntry]]:
        return iter(self._store.items())


def create_in_memory_backend() -> StorageBackend:
    """Create a new, empty in-memory storage backend."""
    return InMemoryBackend()
