"""Chunk entity - text segment cut from a document."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Chunk:
    """Chunk - trimmed text window and its source span in the document."""

    text: str
    index: int
    start_offset: int
    end_offset: int
