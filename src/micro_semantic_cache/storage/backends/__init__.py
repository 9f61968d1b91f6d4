"""
Micro Semantic Cache - Storage Backends

Exports available storage backend implementations.
"""

from .memory import InMemoryBackend, create_in_memory_backend

__all__ = [
    "InMemoryBackend",
    "create_in_memory_backend",
]
