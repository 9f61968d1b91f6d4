"""
Micro Semantic Cache - Data Models

Entries held by the store, results returned by similarity search, and the
hit/miss counters kept by the orchestrator.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class CacheEntry:
    """A cached value with its vector and lifetime."""

    key: str
    value: Any
    vector: list[float]
    created_at: float
    expires_at: float | None = None  # None = never expires

    def is_expired(self, now: float) -> bool:
        """Check whether the entry is logically absent at ``now``."""
        if self.expires_at is None:
            return False
        return now >= self.expires_at


@dataclass(frozen=True)
class SimilarityResult:
    """One match from a similarity search."""

    key: str
    value: Any
    similarity: float


class CacheStatistics:
    """Statistics tracker for cache lookups."""

    def __init__(self) -> None:
        """Initialize stats counters."""
        self.hits: int = 0
        self.misses: int = 0
        self.similar_hits: int = 0

    def reset(self) -> None:
        """Reset all counters."""
        self.hits = 0
        self.misses = 0
        self.similar_hits = 0

    def get_hit_rate(self) -> float:
        """Calculate exact-match hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "similar_hits": self.similar_hits,
            "hit_rate": self.get_hit_rate(),
        }
