"""
Micro Semantic Cache - Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import build_config, get_config, load_config, reload_config, reset_config
from .schemas import SemanticCacheConfig

__all__ = [
    # Loader functions
    "build_config",
    "load_config",
    "get_config",
    "reload_config",
    "reset_config",
    # Schema
    "SemanticCacheConfig",
]
