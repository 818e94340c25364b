#!/usr/bin/env python3
"""
Recursive splitting over a hierarchy of separators.

The text is cut on the coarsest separator present; any piece still over the
budget is cut again with the next separator, down to single characters. The
resulting units are then packed into chunks. When separators are kept, units are
contiguous and every chunk maps back to an exact source range; when they are
dropped, packed chunks carry no offsets.
"""

import logging

from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.domain.value_objects.segment import Segment
from chunkforge.chunking.exceptions import ConfigurationError
from chunkforge.chunking.tokenizers import TokenCounter
from chunkforge.chunking.types import ChunkingStrategy
from chunkforge.chunking.unified.base import BaseSplitter

logger = logging.getLogger(__name__)

DEFAULT_SEPARATORS = ["\n\n", "\n", ". ", "! ", "? ", "; ", ", ", " ", ""]


class RecursiveSplitter(BaseSplitter):
    """
    Separator-hierarchy splitter.

    Paragraph breaks are tried before line breaks, line breaks before sentence
    punctuation, and so on, so the largest natural units that fit are kept
    intact. Chunks carry ``start_offset`` and ``end_offset`` unless
    ``keep_separator`` is off.
    """

    strategy = ChunkingStrategy.RECURSIVE

    def __init__(
        self,
        max_tokens: int | None = None,
        overlap_tokens: int | None = None,
        min_tokens: int | None = None,
        tokenizer: str | TokenCounter | None = None,
        separators: list[str] | None = None,
        keep_separator: bool = True,
    ) -> None:
        """
        Initialize the recursive splitter.

        Args:
            max_tokens: Upper bound on tokens per chunk
            overlap_tokens: Tokens of whole units carried into the next chunk
            min_tokens: Minimum chunk size hint
            tokenizer: Tokenizer name or instance
            separators: Separators from coarsest to finest; "" splits characters
            keep_separator: Keep each separator attached to the preceding piece;
                when False, chunks have no source offsets

        Raises:
            ConfigurationError: If separators is empty
        """
        super().__init__(max_tokens, overlap_tokens, min_tokens, tokenizer)
        self.separators = list(DEFAULT_SEPARATORS if separators is None else separators)
        if not self.separators:
            raise ConfigurationError("separators cannot be empty")
        self.keep_separator = keep_separator

    def _split(self, text: str) -> list[Chunk]:
        stripped = text.strip()
        if not stripped:
            return []

        if self.count_tokens(text) <= self.max_tokens:
            start = text.index(stripped)
            return [
                self.create_chunk(
                    stripped,
                    index=0,
                    start_offset=start,
                    end_offset=start + len(stripped),
                )
            ]

        units = self._split_text(text, 0, self.separators)
        logger.debug(f"Recursive decomposition produced {len(units)} units")
        return self.pack_segments(units, "", self._build_chunk, self._oversized_chunk)

    def _split_text(self, text: str, offset: int, separators: list[str]) -> list[Segment]:
        """
        Decompose text into units of at most max_tokens where possible.

        Recursion depth is bounded by the number of separators.
        """
        if not separators:
            return [Segment(text, self.count_tokens(text), offset)]

        separator, remaining = separators[0], separators[1:]

        if separator == "":
            return [Segment(ch, self.count_tokens(ch), offset + i) for i, ch in enumerate(text)]

        if separator not in text:
            return self._split_text(text, offset, remaining)

        units: list[Segment] = []
        parts = text.split(separator)
        position = offset
        for i, part in enumerate(parts):
            is_last = i == len(parts) - 1
            piece = part + separator if self.keep_separator and not is_last else part
            piece_start = position
            position += len(part) + (0 if is_last else len(separator))

            if not piece:
                continue
            piece_tokens = self.count_tokens(piece)
            if piece_tokens > self.max_tokens:
                units.extend(self._split_text(piece, piece_start, remaining))
            else:
                units.append(Segment(piece, piece_tokens, piece_start))
        return units

    def _offsets(self, start: int, end: int) -> dict[str, int]:
        if not self.keep_separator:
            return {}
        return {"start_offset": start, "end_offset": end}

    def _build_chunk(self, group: list[Segment], text: str, token_count: int) -> Chunk:
        return self.create_chunk(text, token_count, **self._offsets(group[0].start_offset, group[-1].end_offset))

    def _oversized_chunk(self, segment: Segment) -> list[Chunk]:
        logger.debug(f"Unit of {segment.token_count} tokens exceeds {self.max_tokens}; emitting as is")
        return [
            self.create_chunk(
                segment.text,
                segment.token_count,
                **self._offsets(segment.start_offset, segment.end_offset),
            )
        ]
