"""
Micro Semantic Cache - Storage Backend Interface

Defines the abstract interface that all storage backends must implement.

A backend is a plain key/entry map. Expiry, eviction and similarity search
are handled above it by the entry store, so swapping the backend (e.g. for
persistent storage) does not change cache semantics.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator

from ..models import CacheEntry


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.

    Implementations are not required to be safe across processes; a backend
    shared between processes must provide that guarantee itself.
    """

    @abstractmethod
    def get(self, key: str) -> CacheEntry | None:
        """
        Retrieve an entry by key.

        Args:
            key: Storage key

        Returns:
            The stored entry, or None if not found
        """
        pass

    @abstractmethod
    def set(self, key: str, entry: CacheEntry) -> None:
        """
        Store an entry, replacing any entry under the same key.

        Args:
            key: Storage key
            entry: Entry to store
        """
        pass

    @abstractmethod
    def has(self, key: str) -> bool:
        """Check if a key exists in storage."""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete an entry by key.

        Returns:
            True if the key existed and was deleted, False otherwise
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove all entries from storage."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Get the number of stored entries."""
        pass

    @abstractmethod
    def keys(self) -> Iterator[str]:
        """Iterate over storage keys."""
        pass

    @abstractmethod
    def values(self) -> Iterator[CacheEntry]:
        """Iterate over stored entries."""
        pass

    @abstractmethod
    def entries(self) -> Iterator[tuple[str, CacheEntry]]:
        """Iterate over (key, entry) pairs."""
        pass
