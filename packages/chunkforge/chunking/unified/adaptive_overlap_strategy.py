#!/usr/bin/env python3
"""
Semantic splitting with similarity-adaptive overlap.

Chunks are first produced by the semantic splitter without overlap. Each chunk
after the first is then prefixed with trailing sentences of its predecessor,
chosen by how similar they are to the start of the chunk: at least
``min_overlap_tokens`` worth, at most ``max_overlap_tokens``, stopping once the
target ``overlap_tokens`` is reached. The prefix is trimmed whenever it would
push a chunk past max_tokens.
"""

import logging

from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.exceptions import ConfigurationError
from chunkforge.chunking.segmentation import SentenceSegmenter, resolve_segmenter, segment_sentences
from chunkforge.chunking.tokenizers import TokenCounter
from chunkforge.chunking.types import ChunkingStrategy
from chunkforge.chunking.unified.base import BaseSplitter
from chunkforge.chunking.unified.semantic_strategy import SemanticSplitter
from chunkforge.chunking.utils import text_utils
from chunkforge.config import get_settings

logger = logging.getLogger(__name__)

# Characters of the following chunk compared against candidate sentences
PREVIEW_CHARS = 200
DEFAULT_TARGET_OVERLAP = 50


class AdaptiveOverlapSplitter(BaseSplitter):
    """
    Splitter whose overlap adapts to content similarity.

    Every chunk records ``overlap_tokens`` (the overlap actually applied, 0 for
    the first chunk) and ``adaptive_overlap: True``.
    """

    strategy = ChunkingStrategy.ADAPTIVE_OVERLAP

    def __init__(
        self,
        max_tokens: int | None = None,
        overlap_tokens: int | None = None,
        min_tokens: int | None = None,
        tokenizer: str | TokenCounter | None = None,
        min_overlap_tokens: int = 20,
        max_overlap_tokens: int = 100,
        similarity_threshold: float = 0.3,
        language: str | None = None,
        segmenter: SentenceSegmenter | None = None,
    ) -> None:
        """
        Initialize the adaptive overlap splitter.

        Args:
            max_tokens: Upper bound on tokens per chunk
            overlap_tokens: Target overlap, 50 by default; selection stops once it is reached
            min_tokens: Minimum chunk size hint
            tokenizer: Tokenizer name or instance
            min_overlap_tokens: Overlap always taken regardless of similarity
            max_overlap_tokens: Hard cap on the overlap
            similarity_threshold: Jaccard similarity needed beyond the minimum
            language: Language code passed to the segmenter
            segmenter: Sentence-boundary oracle, the regex fallback by default

        Raises:
            ConfigurationError: If the overlap bounds or threshold are invalid
        """
        if overlap_tokens is None:
            overlap_tokens = DEFAULT_TARGET_OVERLAP
        super().__init__(max_tokens, overlap_tokens, min_tokens, tokenizer)
        self.min_overlap_tokens = min_overlap_tokens
        self.max_overlap_tokens = max_overlap_tokens
        self.similarity_threshold = similarity_threshold
        self.language = language or get_settings().DEFAULT_LANGUAGE
        self.segmenter = resolve_segmenter(segmenter)
        self._validate_overlap_bounds()

    def _validate_overlap_bounds(self) -> None:
        details = {
            "min_overlap_tokens": self.min_overlap_tokens,
            "max_overlap_tokens": self.max_overlap_tokens,
            "max_tokens": self.max_tokens,
        }
        if self.min_overlap_tokens < 0:
            raise ConfigurationError("min_overlap_tokens cannot be negative", details=details)
        if self.min_overlap_tokens > self.max_overlap_tokens:
            raise ConfigurationError(
                "min_overlap_tokens cannot be greater than max_overlap_tokens", details=details
            )
        if self.max_overlap_tokens >= self.max_tokens:
            raise ConfigurationError("max_overlap_tokens must be less than max_tokens", details=details)
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ConfigurationError(
                "similarity_threshold must be between 0 and 1",
                details={"similarity_threshold": self.similarity_threshold},
            )

    def _split(self, text: str) -> list[Chunk]:
        base_splitter = SemanticSplitter(
            max_tokens=self.max_tokens,
            overlap_tokens=0,
            min_tokens=self.min_tokens,
            tokenizer=self.tokenizer,
            language=self.language,
            preserve_sentences=True,
            segmenter=self.segmenter,
        )
        chunks = base_splitter.split(text)
        if len(chunks) <= 1:
            return chunks

        result = [chunks[0].with_metadata(overlap_tokens=0, adaptive_overlap=True)]
        for previous, current in zip(chunks, chunks[1:]):
            overlap = self._select_overlap(previous.text, current.text)
            new_text, applied = self._fit_overlap(overlap, current)
            applied_tokens = self.count_tokens(applied) if applied else 0
            metadata = dict(current.metadata)
            metadata.update(overlap_tokens=applied_tokens, adaptive_overlap=True)
            result.append(self.create_chunk(new_text, **metadata))

        logger.debug(f"Applied adaptive overlap to {len(result) - 1} chunk boundaries")
        return self.reindex_chunks(result)

    def _select_overlap(self, previous_text: str, next_text: str) -> str:
        """Choose trailing sentences of ``previous_text`` to repeat before ``next_text``."""
        sentences = segment_sentences(self.segmenter, previous_text, self.language)
        preview = next_text[:PREVIEW_CHARS]

        selected: list[str] = []
        selected_tokens = 0
        for sentence in reversed(sentences):
            candidate_tokens = self.count_tokens(" ".join([sentence, *selected]))
            if candidate_tokens > self.max_overlap_tokens:
                break

            below_minimum = selected_tokens < self.min_overlap_tokens
            if below_minimum or text_utils.similarity(sentence, preview) >= self.similarity_threshold:
                selected.insert(0, sentence)
                selected_tokens = candidate_tokens
                if selected_tokens >= self.overlap_tokens:
                    break
            elif selected_tokens >= self.min_overlap_tokens:
                break

        return " ".join(selected)

    def _fit_overlap(self, overlap: str, current: Chunk) -> tuple[str, str]:
        """
        Prefix ``current`` with as much of ``overlap`` as max_tokens allows.

        Returns:
            The new chunk text and the overlap actually applied
        """
        if not overlap:
            return current.text, ""

        combined = f"{overlap} {current.text}"
        if self.count_tokens(combined) <= self.max_tokens:
            return combined, overlap

        available = self.max_tokens - current.token_count - 1
        if available <= 0:
            return current.text, ""

        words = self._trim_to_tokens(overlap, available).split()
        # The joint can tokenize differently from its parts; drop words until it fits
        while words:
            trimmed = " ".join(words)
            combined = f"{trimmed} {current.text}"
            if self.count_tokens(combined) <= self.max_tokens:
                return combined, trimmed
            words.pop(0)
        return current.text, ""

    def _trim_to_tokens(self, text: str, budget: int) -> str:
        """Keep the trailing sentences (or, failing that, words) of ``text`` within ``budget``."""
        kept: list[str] = []
        for sentence in reversed(segment_sentences(self.segmenter, text, self.language)):
            if self.count_tokens(" ".join([sentence, *kept])) > budget:
                break
            kept.insert(0, sentence)
        if kept:
            return " ".join(kept)

        for word in reversed(text.split()):
            if self.count_tokens(" ".join([word, *kept])) > budget:
                break
            kept.insert(0, word)
        return " ".join(kept)
