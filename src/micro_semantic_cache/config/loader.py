"""
Micro Semantic Cache - Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance.

Environment variables (all optional):
    SEMANTIC_CACHE_MAX_SIZE
    SEMANTIC_CACHE_TTL_SECONDS
    SEMANTIC_CACHE_SIMILARITY_THRESHOLD
    SEMANTIC_CACHE_EMBEDDING_DIMENSION
    SEMANTIC_CACHE_EVICTION_POLICY
    SEMANTIC_CACHE_BACKEND
"""

import logging
import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import SemanticCacheConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "SEMANTIC_CACHE_"

_ENV_FIELDS = (
    "max_size",
    "ttl_seconds",
    "similarity_threshold",
    "embedding_dimension",
    "eviction_policy",
    "backend",
)

_config_instance: SemanticCacheConfig | None = None


def build_config(**options: Any) -> SemanticCacheConfig:
    """
    Validate keyword options into a SemanticCacheConfig.

    Raises:
        ConfigurationError: If any option is invalid or unknown
    """
    try:
        return SemanticCacheConfig(**options)
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "options": sorted(options)},
        )
        raise ConfigurationError(
            "Semantic cache configuration validation failed",
            details={"validation_errors": e.errors(include_url=False)},
        ) from e


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> SemanticCacheConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated SemanticCacheConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    env_path = Path(env_file) if env_file else Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    # Unset variables fall back to schema defaults
    config_dict: dict[str, Any] = {}
    for field in _ENV_FIELDS:
        value = os.getenv(f"{ENV_PREFIX}{field.upper()}")
        if value is not None and value.strip():
            config_dict[field] = value.strip()

    _config_instance = build_config(**config_dict)
    logger.info(
        "Configuration loaded successfully",
        extra={"overrides": sorted(config_dict), "backend": _config_instance.backend},
    )
    return _config_instance


def get_config() -> SemanticCacheConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current SemanticCacheConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> SemanticCacheConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded SemanticCacheConfig instance
    """
    return load_config(env_file=env_file, reload=True)


def reset_config() -> None:
    """
    Drop the cached configuration instance.

    Warning: Only use this in testing contexts.
    """
    global _config_instance
    _config_instance = None
