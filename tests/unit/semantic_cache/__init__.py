"""
Semantic Cache Tests

Unit tests for semantic cache functionality including:
- Vector math and k-nearest-neighbour search
- LRU and FIFO eviction
- Entry store expiry and live counting
- Embedding generation
- Cache operations and statistics
"""
