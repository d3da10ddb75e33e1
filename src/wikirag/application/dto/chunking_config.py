"""Chunking configuration DTO."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChunkingConfig:
    """Configuration for text chunking."""

    chunk_size: int = 500
    chunk_overlap: int = 50
