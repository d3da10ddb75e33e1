"""Chunker port - text splitting."""

from typing import Protocol

from wikirag.domain.entities import Chunk


class Chunker(Protocol):
    """Port for splitting text into chunks."""

    def chunk_text(self, text: str) -> list[Chunk]: ...
