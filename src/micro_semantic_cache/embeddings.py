"""
Semantic Cache Embedding Generator

Turns text into fixed-length vectors through a pluggable embedding function.

The embedding function takes a string and returns a numeric sequence, either
directly or as an awaitable, so both plain callables and async API clients
(OpenAI, Ollama, sentence-transformers wrapped in a thread, ...) plug in the
same way. Exceptions raised by the function reach the caller unchanged.

The built-in ``default_embedding`` is a character-hashing vectorizer. It is
deterministic and dependency-light, but it has no notion of meaning: use it
to run the cache out of the box, never for real semantic matching.
"""

from __future__ import annotations

import inspect
import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from functools import partial

import numpy as np

from .errors import DimensionMismatchError, EmbeddingProviderError
from .vector import as_vector, normalize

logger = logging.getLogger(__name__)

EmbedFn = Callable[[str], Sequence[float] | Awaitable[Sequence[float]]]

DEFAULT_EMBEDDING_DIMENSION = 384


def default_embedding(text: str, dimension: int = DEFAULT_EMBEDDING_DIMENSION) -> list[float]:
    """
    Hash a text into a unit-length vector from its characters.

    Each character adds ``sin(position * codepoint) * 0.1`` to the slot
    ``codepoint % dimension``; the result is L2-normalized. Text is
    lower-cased first. Empty text yields the zero vector.

    Args:
        text: Input text
        dimension: Target embedding dimension

    Returns:
        Embedding vector of length ``dimension``
    """
    if dimension < 1:
        raise ValueError("dimension must be >= 1")

    embedding = np.zeros(dimension, dtype=float)
    for position, char in enumerate(text.lower()):
        code = ord(char)
        embedding[code % dimension] += math.sin(position * code) * 0.1

    return normalize(embedding)


class EmbeddingGenerator:
    """
    Embedding generator for the semantic cache.

    Wraps a sync or async embedding function and checks that every vector it
    returns has the configured dimension.
    """

    def __init__(
        self,
        dimension: int = DEFAULT_EMBEDDING_DIMENSION,
        embed_fn: EmbedFn | None = None,
    ):
        """
        Initialize embedding generator.

        Args:
            dimension: Required vector length
            embed_fn: Text-to-vector function (defaults to ``default_embedding``)
        """
        self.dimension = dimension
        self.is_default = embed_fn is None
        self._embed_fn: EmbedFn = embed_fn or partial(default_embedding, dimension=dimension)

        if self.is_default:
            logger.debug(
                "Using built-in hashing embeddings (not suitable for semantic matching)",
                extra={"dimension": dimension},
            )

    async def generate(self, text: str) -> list[float]:
        """
        Generate embedding for text.

        Args:
            text: Text to embed

        Returns:
            Embedding vector as list of floats

        Raises:
            DimensionMismatchError: If the function returns a vector of the wrong length
            EmbeddingProviderError: If the function returns something that is not a vector
        """
        result = self._embed_fn(text)
        if inspect.isawaitable(result):
            result = await result

        try:
            vector = as_vector(result, self.dimension)
        except DimensionMismatchError:
            logger.error(
                "Embedding function returned a vector of the wrong dimension",
                extra={"expected": self.dimension},
            )
            raise
        except (TypeError, ValueError) as e:
            raise EmbeddingProviderError(
                f"Embedding function returned an invalid vector: {e}",
                details={"result_type": type(result).__name__, "error": str(e)},
            ) from e

        logger.debug("Generated embedding", extra={"text_length": len(text), "dimension": self.dimension})
        return vector
