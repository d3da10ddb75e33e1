"""Search mode."""

from enum import StrEnum


class SearchMode(StrEnum):
    """Vector-only or vector fused with keyword search."""

    VECTOR = "vector"
    HYBRID = "hybrid"
