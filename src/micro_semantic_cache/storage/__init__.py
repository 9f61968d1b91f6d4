"""
Micro Semantic Cache - Storage Module

Pluggable key/entry storage underneath the entry store.

Canonical exports:
- interface.py: Abstract backend interface all backends must implement
- factory.py: Backend registry and creation by name
- backends/: Backend implementations (memory in core)

Usage:
    from micro_semantic_cache.storage import create_backend

    backend = create_backend("memory")
"""

from .backends import InMemoryBackend, create_in_memory_backend
from .factory import (
    create_backend,
    list_backends,
    register_backend,
    unregister_backend,
)
from .interface import StorageBackend

__all__ = [
    # Factory functions
    "create_backend",
    "register_backend",
    "unregister_backend",
    "list_backends",
    # Interface
    "StorageBackend",
    # Backends
    "InMemoryBackend",
    "create_in_memory_backend",
]
