"""
Micro Semantic Cache - Core Error Types

Defines the exception hierarchy for the cache runtime.
All exceptions raised by the library inherit from SemanticCacheError.

Misses and expirations are normal outcomes and never raise.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Standard error codes for structured error reporting."""

    # Input validation errors
    INVALID_INPUT = "INVALID_INPUT"
    DIMENSION_MISMATCH = "DIMENSION_MISMATCH"

    # Embedding provider errors
    EMBEDDING_PROVIDER_ERROR = "EMBEDDING_PROVIDER_ERROR"

    # Configuration errors
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # Internal errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class SemanticCacheError(Exception):
    """Base exception for all semantic cache errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured logs and responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(SemanticCacheError):
    """Raised when configuration is invalid or missing."""

    pass


class DimensionMismatchError(SemanticCacheError, ValueError):
    """Raised when a vector's length disagrees with the expected dimension."""

    def __init__(self, expected: int, actual: int, details: dict[str, Any] | None = None):
        message = f"Embedding dimension mismatch: expected {expected}, got {actual}"
        error_details = {**(details or {}), "expected": expected, "actual": actual}
        super().__init__(message, error_details)

        self.expected = expected
        self.actual = actual


class EmbeddingProviderError(SemanticCacheError):
    """
    Raised when an embedding provider produces unusable output.

    Custom providers may raise it as well. Exceptions raised by a provider
    are never wrapped: they reach the caller unchanged.
    """

    pass


def extract_error_code(error: Exception) -> ErrorCode:
    """
    Extract appropriate ErrorCode from an exception.

    Args:
        error: Exception to categorize

    Returns:
        Appropriate ErrorCode for the exception
    """
    if isinstance(error, DimensionMismatchError):
        return ErrorCode.DIMENSION_MISMATCH

    if isinstance(error, EmbeddingProviderError):
        return ErrorCode.EMBEDDING_PROVIDER_ERROR

    if isinstance(error, ConfigurationError):
        return ErrorCode.CONFIGURATION_ERROR

    if isinstance(error, (ValueError, TypeError)):
        return ErrorCode.INVALID_INPUT

    return ErrorCode.INTERNAL_ERROR
