#!/usr/bin/env python3
"""
Fixed-size character splitting measured in tokens.

Walks a cursor through the text, cutting the longest prefix that fits the token
budget. With overlap, the cursor steps back by the longest suffix of the chunk
that fits the overlap budget. With no overlap the chunks partition the input
exactly.
"""

import logging

from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.exceptions import ConfigurationError
from chunkforge.chunking.types import ChunkingStrategy
from chunkforge.chunking.unified.base import BaseSplitter

logger = logging.getLogger(__name__)


class CharacterSplitter(BaseSplitter):
    """
    Token-bounded fixed-size splitter.

    Chunks carry ``start_offset`` and ``end_offset`` into the input text.
    """

    strategy = ChunkingStrategy.CHARACTER

    def _split(self, text: str) -> list[Chunk]:
        chunks: list[Chunk] = []
        length = len(text)
        cursor = 0

        while cursor < length:
            size = self.max_prefix_length(text, cursor)
            chunk_text = text[cursor : cursor + size]
            chunks.append(
                self.create_chunk(
                    chunk_text,
                    index=len(chunks),
                    start_offset=cursor,
                    end_offset=cursor + size,
                )
            )

            if cursor + size >= length:
                break

            overlap = self.max_suffix_length(chunk_text) if self.overlap_tokens > 0 else 0
            advance = size - overlap
            if advance <= 0:
                raise ConfigurationError(
                    f"Character splitting cannot advance at offset {cursor}: overlap of "
                    f"{self.overlap_tokens} tokens covers the whole {size}-character chunk",
                    details={
                        "offset": cursor,
                        "chunk_length": size,
                        "max_tokens": self.max_tokens,
                        "overlap_tokens": self.overlap_tokens,
                    },
                )
            cursor += advance

        logger.debug(f"Character split produced {len(chunks)} chunks")
        return chunks
