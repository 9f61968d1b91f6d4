"""
Micro Semantic Cache - Test Configuration and Shared Fixtures

Provides pytest configuration and shared fixtures for unit and integration tests.
"""

from collections.abc import Callable, Generator
from typing import Any

import pytest


class FakeClock:
    """Manually advanced time source in seconds."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# Hand-picked 3-d vectors standing in for a real embedding model
SAMPLE_VECTORS: dict[str, list[float]] = {
    "machine learning": [1.0, 0.0, 0.0],
    "ML basics": [0.95, 0.05, 0.0],
    "deep learning": [0.9, 0.1, 0.0],
    "weather forecast": [0.0, 0.0, 1.0],
    "database query": [0.0, 1.0, 0.0],
}


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def axis() -> Callable[..., list[float]]:
    """Build a unit vector along one axis."""

    def _axis(index: int, dimension: int = 3) -> list[float]:
        vector = [0.0] * dimension
        vector[index] = 1.0
        return vector

    return _axis


@pytest.fixture
def sample_vectors() -> dict[str, list[float]]:
    """Text -> 3-d vector table for deterministic embeddings."""
    return dict(SAMPLE_VECTORS)


@pytest.fixture
def sample_embed_fn(sample_vectors) -> Callable[[str], list[float]]:
    """Deterministic embedding function over the sample vector table."""

    def _embed(text: str) -> list[float]:
        return sample_vectors[text]

    return _embed


@pytest.fixture
def sample_cache_data() -> dict[str, Any]:
    """Sample values of assorted types."""
    return {
        "simple_string": "hello",
        "simple_int": 42,
        "simple_float": 3.14,
        "simple_bool": True,
        "simple_none": None,
        "complex_dict": {
            "nested": {
                "key": "value",
                "number": 123,
                "list": [1, 2, 3],
            }
        },
        "complex_list": [
            {"id": 1, "name": "Alice"},
            {"id": 2, "name": "Bob"},
        ],
    }


@pytest.fixture(autouse=True)
def reset_loaded_config() -> Generator[None, None, None]:
    """Reset the config singleton after each test to prevent state leakage."""
    yield
    from micro_semantic_cache.config import reset_config

    reset_config()
