#!/usr/bin/env python3
"""
Sentence- and paragraph-aware splitting.

The cleaned text is cut into sentences (or paragraphs) and those are packed
greedily into chunks, carrying a tail of whole sentences forward as overlap.
A sentence that alone exceeds the budget is split by characters.
"""

import logging

from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.domain.value_objects.segment import Segment
from chunkforge.chunking.segmentation import SentenceSegmenter, resolve_segmenter, segment_sentences
from chunkforge.chunking.tokenizers import TokenCounter
from chunkforge.chunking.types import ChunkingStrategy
from chunkforge.chunking.unified.base import BaseSplitter
from chunkforge.chunking.unified.character_strategy import CharacterSplitter
from chunkforge.chunking.utils import text_utils
from chunkforge.config import get_settings

logger = logging.getLogger(__name__)

SENTENCE_SEPARATOR = " "
PARAGRAPH_SEPARATOR = "\n\n"


class SemanticSplitter(BaseSplitter):
    """
    Splitter that keeps sentences (or paragraphs) whole.

    Chunk metadata records ``segment_count``, the number of sentences or
    paragraphs packed into the chunk.
    """

    strategy = ChunkingStrategy.SEMANTIC

    def __init__(
        self,
        max_tokens: int | None = None,
        overlap_tokens: int | None = None,
        min_tokens: int | None = None,
        tokenizer: str | TokenCounter | None = None,
        language: str | None = None,
        preserve_sentences: bool | None = None,
        preserve_paragraphs: bool = False,
        normalize_whitespace: bool = True,
        segmenter: SentenceSegmenter | None = None,
    ) -> None:
        """
        Initialize the semantic splitter.

        Args:
            max_tokens: Upper bound on tokens per chunk
            overlap_tokens: Tokens of whole sentences carried into the next chunk
            min_tokens: Minimum chunk size hint
            tokenizer: Tokenizer name or instance
            language: Language code passed to the segmenter
            preserve_sentences: Pack sentences; when False (and paragraphs are not
                preserved) the text is split by characters
            preserve_paragraphs: Pack paragraphs instead of sentences
            normalize_whitespace: Collapse whitespace before splitting; disable to
                keep indentation
            segmenter: Sentence-boundary oracle, the regex fallback by default
        """
        super().__init__(max_tokens, overlap_tokens, min_tokens, tokenizer)
        settings = get_settings()
        self.language = language or settings.DEFAULT_LANGUAGE
        self.preserve_sentences = settings.PRESERVE_SENTENCES if preserve_sentences is None else preserve_sentences
        self.preserve_paragraphs = preserve_paragraphs
        self.normalize_whitespace = normalize_whitespace
        self.segmenter = resolve_segmenter(segmenter)

    def _split(self, text: str) -> list[Chunk]:
        cleaned = text_utils.clean(text, remove_extra_whitespace=self.normalize_whitespace)
        if not cleaned:
            return []

        token_count = self.count_tokens(cleaned)
        if token_count <= self.max_tokens:
            return [self.create_chunk(cleaned, token_count, index=0, segment_count=1)]

        if self.preserve_paragraphs:
            pieces = text_utils.split_paragraphs(cleaned)
            separator = PARAGRAPH_SEPARATOR
        elif self.preserve_sentences:
            pieces = segment_sentences(self.segmenter, cleaned, self.language)
            separator = SENTENCE_SEPARATOR
        else:
            return self._character_splitter(self.overlap_tokens).split(cleaned)

        segments = [Segment(piece, self.count_tokens(piece)) for piece in pieces if piece]
        logger.debug(f"Packing {len(segments)} segments with separator {separator!r}")
        return self.pack_segments(segments, separator, self._build_chunk, self._split_oversized)

    def _build_chunk(self, group: list[Segment], text: str, token_count: int) -> Chunk:
        return self.create_chunk(text, token_count, segment_count=len(group))

    def _split_oversized(self, segment: Segment) -> list[Chunk]:
        logger.debug(f"Segment of {segment.token_count} tokens exceeds {self.max_tokens}; splitting by characters")
        return [
            self.create_chunk(chunk.text, chunk.token_count, segment_count=1)
            for chunk in self._character_splitter(0).split(segment.text)
        ]

    def _character_splitter(self, overlap_tokens: int) -> CharacterSplitter:
        return CharacterSplitter(
            max_tokens=self.max_tokens,
            overlap_tokens=overlap_tokens,
            min_tokens=self.min_tokens,
            tokenizer=self.tokenizer,
        )
