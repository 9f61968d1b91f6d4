"""
Vector Similarity Utilities

Cosine similarity, L2 normalization and the k-nearest-neighbour scan used by
semantic lookups. Pure functions, no state.

The scan is exhaustive (one cosine per live entry), which is the intended
trade-off for an in-process cache of at most a few thousand entries.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from .errors import DimensionMismatchError
from .models import CacheEntry, SimilarityResult

Vector = Sequence[float] | np.ndarray


def _as_array(vector: Vector) -> np.ndarray:
    return np.asarray(vector, dtype=float)


def _cosine(query: np.ndarray, query_norm: float, other: np.ndarray) -> float:
    if query.shape[0] != other.shape[0]:
        raise DimensionMismatchError(expected=query.shape[0], actual=other.shape[0])

    other_norm = float(np.linalg.norm(other))
    if query_norm == 0 or other_norm == 0:
        return 0.0

    return float(np.dot(query, other) / (query_norm * other_norm))


def as_vector(vector: Vector, dimension: int) -> list[float]:
    """
    Validate a vector and convert it to a list of floats.

    Args:
        vector: One-dimensional numeric sequence
        dimension: Required length

    Returns:
        The vector as a new list of floats

    Raises:
        DimensionMismatchError: If the length differs from ``dimension``
        ValueError: If the input is not a one-dimensional numeric sequence
    """
    arr = _as_array(vector)
    if arr.ndim != 1:
        raise ValueError(f"Expected a one-dimensional vector, got shape {arr.shape}")
    if arr.shape[0] != dimension:
        raise DimensionMismatchError(expected=dimension, actual=arr.shape[0])
    return arr.tolist()


def cosine_similarity(vec1: Vector, vec2: Vector) -> float:
    """
    Calculate cosine similarity between two vectors.

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity in approximately [-1, 1]; exactly 0.0 when either
        vector has zero magnitude

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    v1 = _as_array(vec1)
    return _cosine(v1, float(np.linalg.norm(v1)), _as_array(vec2))


def normalize(vector: Vector) -> list[float]:
    """
    Scale a vector to unit L2 norm.

    A zero vector is returned unchanged.
    """
    arr = _as_array(vector)
    magnitude = float(np.linalg.norm(arr))

    if magnitude == 0:
        return arr.tolist()

    return (arr / magnitude).tolist()


def find_k_nearest(
    query_vector: Vector,
    entries: Iterable[CacheEntry],
    k: int = 5,
    threshold: float = 0.0,
) -> list[SimilarityResult]:
    """
    Find the k entries most similar to a query vector.

    Callers pass live entries only; expiry is the store's concern.

    Args:
        query_vector: Query vector
        entries: Candidate entries, in a deterministic order
        k: Maximum number of results (<= 0 yields no results)
        threshold: Minimum similarity, applied as given without clamping

    Returns:
        Matches sorted by similarity descending. Equal similarities keep
        the order in which the entries were encountered.
    """
    if k <= 0:
        return []

    query = _as_array(query_vector)
    query_norm = float(np.linalg.norm(query))

    results: list[SimilarityResult] = []
    for entry in entries:
        similarity = _cosine(query, query_norm, _as_array(entry.vector))
        if similarity >= threshold:
            results.append(SimilarityResult(key=entry.key, value=entry.value, similarity=similarity))

    # sorted() is stable, including with reverse=True
    results = sorted(results, key=lambda r: r.similarity, reverse=True)
    return results[:k]
