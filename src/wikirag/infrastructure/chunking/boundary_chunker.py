"""Boundary-aware text chunker with overlap."""

from wikirag.application.dto.chunking_config import ChunkingConfig
from wikirag.domain.entities import Chunk

MIN_CHUNK_LENGTH = 50
NEWLINE_WINDOW = 50
SPACE_WINDOW = 20


def _find_break(text: str, end: int) -> int:
    """Move ``end`` to just past a nearby newline, else a nearby space."""
    newline = text.find("\n", max(end - NEWLINE_WINDOW, 0))
    if newline != -1 and newline < end + NEWLINE_WINDOW:
        return newline + 1
    space = text.find(" ", max(end - SPACE_WINDOW, 0))
    if space != -1 and space < end + SPACE_WINDOW:
        return space + 1
    return end


class BoundaryChunker:
    """Splits text into ~chunk_size windows, cutting at newlines or spaces.

    Consecutive windows share ``chunk_overlap`` characters. Windows shorter than
    50 characters after trimming are dropped.
    """

    def __init__(self, config: ChunkingConfig | None = None) -> None:
        self._config = config or ChunkingConfig()

    def chunk_text(self, text: str) -> list[Chunk]:
        """Split text into overlapping chunks."""
        if not text or len(text) < MIN_CHUNK_LENGTH:
            return []

        chunk_size = self._config.chunk_size
        overlap = self._config.chunk_overlap
        length = len(text)
        chunks: list[Chunk] = []
        start = 0

        while start < length:
            end = start + chunk_size
            if end < length:
                end = _find_break(text, end)
            else:
                end = length

            chunk = text[start:end].strip()
            if len(chunk) >= MIN_CHUNK_LENGTH:
                chunks.append(
                    Chunk(
                        text=chunk,
                        index=len(chunks),
                        start_offset=start,
                        end_offset=end,
                    )
                )

            if end == length:
                break
            # Never step backwards or stand still.
            start = max(end - overlap, start + 1)

        return chunks
