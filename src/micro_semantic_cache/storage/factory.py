"""
Micro Semantic Cache - Storage Backend Factory

Canonical factory for creating storage backends by name.

Key points:
- "memory" is always registered
- Callers plug in other backends (e.g. persistent ones) with register_backend()
- Every call returns a fresh backend; backends are never shared between caches

Examples:
    from micro_semantic_cache.storage.factory import create_backend, register_backend

    backend = create_backend("memory")

    register_backend("sqlite", lambda: SqliteBackend("cache.db"))
    cache = create_semantic_cache(backend="sqlite")
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..errors import ConfigurationError
from .backends.memory import InMemoryBackend
from .interface import StorageBackend

logger = logging.getLogger(__name__)

BackendFactory = Callable[[], StorageBackend]

DEFAULT_BACKEND = "memory"

_backend_factories: dict[str, BackendFactory] = {DEFAULT_BACKEND: InMemoryBackend}


def register_backend(name: str, factory: BackendFactory, *, replace: bool = False) -> None:
    """
    Register a storage backend factory under a name.

    Args:
        name: Backend name used in configuration
        factory: Zero-argument callable returning a StorageBackend
        replace: Allow overwriting an existing registration

    Raises:
        ConfigurationError: If the name is empty or already registered
    """
    key = name.strip().lower()
    if not key:
        raise ConfigurationError("Backend name must not be empty")

    if key in _backend_factories and not replace:
        raise ConfigurationError(
            f"Storage backend already registered: {key}",
            details={"backend": key, "registered": list_backends()},
        )

    _backend_factories[key] = factory
    logger.debug("Registered storage backend '%s'", key)


def unregister_backend(name: str) -> bool:
    """
    Remove a backend registration. The built-in memory backend cannot be removed.

    Returns:
        True if a registration was removed
    """
    key = name.strip().lower()
    if key == DEFAULT_BACKEND:
        return False
    return _backend_factories.pop(key, None) is not None


def list_backends() -> list[str]:
    """List all registered backend names."""
    return list(_backend_factories.keys())


def create_backend(name: str = DEFAULT_BACKEND) -> StorageBackend:
    """
    Create a storage backend instance by name.

    Args:
        name: Registered backend name

    Returns:
        New storage backend instance

    Raises:
        ConfigurationError: If the backend is unknown or its factory fails
    """
    key = name.strip().lower()
    factory = _backend_factories.get(key)
    if factory is None:
        raise ConfigurationError(
            f"Unknown storage backend: {name}",
            details={"backend": name, "supported": list_backends()},
        )

    try:
        backend = factory()
    except Exception as e:
        logger.error(
            "Failed to create storage backend '%s': %s",
            key,
            e,
            extra={"backend": key, "error": str(e)},
            exc_info=True,
        )
        raise ConfigurationError(
            f"Failed to create storage backend '{key}': {e}",
            details={"backend": key, "error": str(e)},
        ) from e

    if not isinstance(backend, StorageBackend):
        raise ConfigurationError(
            f"Backend factory for '{key}' did not return a StorageBackend",
            details={"backend": key, "returned": type(backend).__name__},
        )

    logger.debug("Created storage backend '%s'", key)
    return backend
