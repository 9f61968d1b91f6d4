"""
Micro Semantic Cache - Configuration Schemas

Defines typed configuration using Pydantic for validation and type safety.
Configuration is validated when a cache is created and is immutable afterwards:
a cache sizes its store and embedder from it once, so it cannot change under a
live cache.

The embedding function is not part of the schema: it is code, not settings,
and is passed to the cache constructor instead.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..eviction import EvictionPolicy


class SemanticCacheConfig(BaseModel):
    """Configuration for a semantic cache instance."""

    max_size: int = Field(default=1000, ge=1, description="Maximum entries before eviction")
    ttl_seconds: float = Field(
        default=3600.0,
        ge=0.0,
        description="Entry lifetime in seconds after insertion. 0 disables expiry: entries never expire.",
    )
    similarity_threshold: float = Field(
        default=0.85,
        ge=0.0,
        le=1.0,
        description="Default minimum similarity for get_similar (0.0-1.0)",
    )
    embedding_dimension: int = Field(default=384, ge=1, description="Required vector length")
    eviction_policy: EvictionPolicy = Field(
        default=EvictionPolicy.LRU,
        description="Eviction policy when full: 'lru' (access order) or 'fifo' (insertion order)",
    )
    backend: str = Field(default="memory", description="Registered storage backend name")

    @field_validator("eviction_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v: object) -> object:
        """Accept policy names in any case."""
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("backend")
    @classmethod
    def validate_backend(cls, v: str) -> str:
        """Ensure backend name is usable as a registry key."""
        name = v.strip().lower()
        if not name:
            raise ValueError("backend must not be empty")
        return name

    model_config = ConfigDict(frozen=True, extra="forbid")
