"""
Micro Semantic Cache

In-process cache with exact-key lookups and vector similarity search, for
skipping repeated expensive calls (LLM completions, embedding APIs) when a
new request means the same thing as an earlier one.

Public API:
    - SemanticCache / create_semantic_cache(): the cache
    - SemanticCacheConfig / load_config(): configuration
    - StorageBackend / InMemoryBackend / register_backend(): pluggable storage
    - cosine_similarity / normalize / find_k_nearest: vector utilities
    - default_embedding: built-in (non-semantic) hashing embeddings

Usage:
    >>> from micro_semantic_cache import create_semantic_cache
    >>>
    >>> cache = create_semantic_cache(max_size=500, similarity_threshold=0.8)
    >>> await cache.set("What is Python?", "Python is a programming language")
    >>> await cache.get("What is Python?")
    'Python is a programming language'
    >>>
    >>> # Plug in a real embedding model (sync or async)
    >>> cache = create_semantic_cache(embed_fn=openai_embed, embedding_dimension=1536)
    >>> for match in await cache.get_similar("Tell me about Python"):
    ...     print(match.key, match.similarity)
"""

__version__ = "1.0.0"

from .cache import SemanticCache, create_semantic_cache
from .config import SemanticCacheConfig, get_config, load_config, reload_config
from .embeddings import EmbeddingGenerator, default_embedding
from .errors import (
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingProviderError,
    ErrorCode,
    SemanticCacheError,
)
from .eviction import EvictionPolicy
from .models import CacheEntry, CacheStatistics, SimilarityResult
from .storage import (
    InMemoryBackend,
    StorageBackend,
    create_backend,
    create_in_memory_backend,
    register_backend,
)
from .store import EntryStore
from .vector import cosine_similarity, find_k_nearest, normalize

__all__ = [
    # Main cache interface
    "SemanticCache",
    "create_semantic_cache",
    "EntryStore",
    # Configuration
    "SemanticCacheConfig",
    "EvictionPolicy",
    "load_config",
    "get_config",
    "reload_config",
    # Models
    "CacheEntry",
    "CacheStatistics",
    "SimilarityResult",
    # Embeddings
    "EmbeddingGenerator",
    "default_embedding",
    # Storage
    "StorageBackend",
    "InMemoryBackend",
    "create_backend",
    "create_in_memory_backend",
    "register_backend",
    # Vector utilities
    "cosine_similarity",
    "normalize",
    "find_k_nearest",
    # Errors
    "SemanticCacheError",
    "ConfigurationError",
    "DimensionMismatchError",
    "EmbeddingProviderError",
    "ErrorCode",
]
