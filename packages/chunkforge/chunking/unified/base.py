#!/usr/bin/env python3
"""
Splitter base class.

Every strategy inherits parameter validation, tokenizer binding, chunk
construction, re-indexing, the binary-search boundary primitives and the greedy
segment packing with overlap carry. Subclasses only implement ``_split``.
"""

import asyncio
import logging
import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path
from typing import Any, ClassVar

from chunkforge.chunking import metrics
from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.domain.value_objects.segment import Segment
from chunkforge.chunking.domain.value_objects.splitter_config import SplitterConfig
from chunkforge.chunking.exceptions import ChunkingError, TokenizationError
from chunkforge.chunking.streaming import stream_file
from chunkforge.chunking.tokenizers import TokenCounter, create_tokenizer
from chunkforge.chunking.types import ChunkingStrategy
from chunkforge.config import get_settings

logger = logging.getLogger(__name__)

# Initial probe window for prefix searches, in characters per token of budget
CHARS_PER_TOKEN_ESTIMATE = 4

ChunkBuilder = Callable[[list[Segment], str, int], Chunk]
OversizedHandler = Callable[[Segment], list[Chunk]]


class BaseSplitter(ABC):
    """
    Abstract base class for all splitting strategies.

    A splitter is configured once and is stateless afterwards, so ``split`` can
    be called concurrently from several threads as long as the tokenizer allows
    it (both bundled tokenizers do).
    """

    strategy: ClassVar[ChunkingStrategy]

    def __init__(
        self,
        max_tokens: int | None = None,
        overlap_tokens: int | None = None,
        min_tokens: int | None = None,
        tokenizer: str | TokenCounter | None = None,
    ) -> None:
        """
        Initialize the splitter.

        Args:
            max_tokens: Upper bound on tokens per chunk
            overlap_tokens: Tokens shared between consecutive chunks
            min_tokens: Minimum chunk size hint; validated, not enforced
            tokenizer: Tokenizer name or instance

        Raises:
            ConfigurationError: If the limits violate their invariants
        """
        settings = get_settings()
        self.config = SplitterConfig(
            max_tokens=settings.DEFAULT_MAX_TOKENS if max_tokens is None else max_tokens,
            overlap_tokens=settings.DEFAULT_OVERLAP_TOKENS if overlap_tokens is None else overlap_tokens,
            min_tokens=settings.DEFAULT_MIN_TOKENS if min_tokens is None else min_tokens,
        )
        self.tokenizer = create_tokenizer(tokenizer)

    @property
    def name(self) -> str:
        return self.strategy.value

    @property
    def max_tokens(self) -> int:
        return self.config.max_tokens

    @property
    def overlap_tokens(self) -> int:
        return self.config.overlap_tokens

    @property
    def min_tokens(self) -> int:
        return self.config.min_tokens

    def split(self, text: str | None) -> list[Chunk]:
        """
        Split text into chunks.

        Args:
            text: The text to split; None and "" produce no chunks

        Returns:
            Chunks in document order, with ``index`` equal to their position

        Raises:
            TokenizationError: If the tokenizer fails
            ConfigurationError: If the splitter cannot make progress
        """
        if not text:
            return []

        start = time.perf_counter()
        try:
            chunks = self._split(text)
        except Exception as e:
            logger.error(f"{self.name} split failed after {time.perf_counter() - start:.3f}s: {e}")
            metrics.record_split_error(self.name, e)
            raise

        duration = time.perf_counter() - start
        total_tokens = sum(chunk.token_count for chunk in chunks)
        logger.debug(
            f"{self.name} split {len(text)} chars into {len(chunks)} chunks "
            f"({total_tokens} tokens) in {duration:.3f}s"
        )
        metrics.record_split(self.name, duration, len(chunks), total_tokens)
        return chunks

    async def split_async(self, text: str | None) -> list[Chunk]:
        """Run ``split`` in the default executor."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.split, text)

    def stream_file(self, file_path: str | Path, encoding: str = "utf-8") -> Iterator[Chunk]:
        """Lazily split a file; see ``chunkforge.chunking.streaming.stream_file``."""
        return stream_file(self, file_path, encoding=encoding)

    @abstractmethod
    def _split(self, text: str) -> list[Chunk]:
        """Split non-empty text."""

    def count_tokens(self, text: str) -> int:
        """
        Count tokens with the bound tokenizer.

        Raises:
            TokenizationError: If the tokenizer fails for any reason
        """
        try:
            return self.tokenizer.count(text)
        except ChunkingError:
            raise
        except Exception as e:
            raise TokenizationError("Failed to count tokens", e) from e

    def fits(self, text: str) -> bool:
        return self.count_tokens(text) <= self.max_tokens

    def create_chunk(self, text: str, token_count: int | None = None, **metadata: Any) -> Chunk:
        """Build a chunk, counting its tokens unless the count is already known."""
        if token_count is None:
            token_count = self.count_tokens(text)
        return Chunk(text, metadata, token_count)

    @staticmethod
    def reindex_chunks(chunks: Sequence[Chunk]) -> list[Chunk]:
        """Return new chunks whose ``index`` matches their position."""
        reindexed = []
        for i, chunk in enumerate(chunks):
            metadata = {"index": i}
            metadata.update((key, value) for key, value in chunk.metadata.items() if key != "index")
            reindexed.append(Chunk(chunk.text, metadata, chunk.token_count))
        return reindexed

    def max_prefix_length(self, text: str, start: int = 0, limit: int | None = None) -> int:
        """
        Find the longest prefix of ``text[start:]`` within a token budget.

        Probes an exponentially growing window first so that only a region
        around the cut is ever tokenized, then binary-searches inside it.

        Args:
            text: Source text
            start: Cursor position
            limit: Token budget, max_tokens by default

        Returns:
            Prefix length in characters; at least 1 while text remains, even if
            a single character exceeds the budget
        """
        remaining = len(text) - start
        if remaining <= 0:
            return 0
        limit = self.max_tokens if limit is None else limit

        window = min(remaining, max(limit * CHARS_PER_TOKEN_ESTIMATE, 1))
        while window < remaining and self.count_tokens(text[start : start + window]) <= limit:
            window = min(remaining, window * 2)

        if window == remaining and self.count_tokens(text[start:]) <= limit:
            return remaining

        low, high = 1, window - 1
        best = 1
        while low <= high:
            mid = (low + high) // 2
            if self.count_tokens(text[start : start + mid]) <= limit:
                best = mid
                low = mid + 1
            else:
                high = mid - 1
        return best

    def max_suffix_length(self, text: str, limit: int | None = None) -> int:
        """
        Find the longest suffix of ``text`` within a token budget.

        Args:
            text: Source text
            limit: Token budget, overlap_tokens by default

        Returns:
            Suffix length in characters, possibly 0
        """
        limit = self.overlap_tokens if limit is None else limit
        if limit <= 0 or not text:
            return 0
        if self.count_tokens(text) <= limit:
            return len(text)

        low, high = 1, len(text) - 1
        best = 0
        while low <= high:
            mid = (low + high) // 2
            if self.count_tokens(text[-mid:]) <= limit:
                best = mid
                low = mid + 1
            else:
                high = mid - 1
        return best

    def pack_segments(
        self,
        segments: Sequence[Segment],
        separator: str,
        build_chunk: ChunkBuilder,
        split_oversized: OversizedHandler,
    ) -> list[Chunk]:
        """
        Greedily pack segments into chunks of at most max_tokens.

        When a segment does not fit, the current group is flushed and the next
        group is seeded with a tail of the flushed one worth at most
        overlap_tokens. Tail segments are dropped from the front if the tail and
        the incoming segment would not fit together. A segment larger than
        max_tokens on its own is handed to ``split_oversized`` and never joins a
        group; a group holding nothing but carried tail is never emitted.

        Args:
            segments: Units in document order
            separator: Text placed between units of one chunk
            build_chunk: Called with (segments, text, token_count) for each group
            split_oversized: Turns an oversized segment into chunks

        Returns:
            Chunks with consecutive indices
        """
        chunks: list[Chunk] = []
        separator_tokens = self.count_tokens(separator) if separator else 0
        group: list[Segment] = []
        group_tokens = 0
        has_new_content = False

        def render(units: list[Segment]) -> str:
            return separator.join(unit.text for unit in units)

        for segment in segments:
            if segment.token_count > self.max_tokens:
                if group and has_new_content:
                    chunks.append(build_chunk(group, render(group), group_tokens))
                chunks.extend(split_oversized(segment))
                group, group_tokens, has_new_content = [], 0, False
                continue

            if group and group_tokens + separator_tokens + segment.token_count > self.max_tokens:
                if has_new_content:
                    chunks.append(build_chunk(group, render(group), group_tokens))
                group = self._overlap_tail(group, separator_tokens, segment.token_count)
                has_new_content = False

            had_new_content = has_new_content
            group.append(segment)
            group_tokens = self.count_tokens(render(group))

            # Tokenizers may merge across the separator; recheck the real count
            if group_tokens > self.max_tokens and len(group) > 1:
                group.pop()
                if had_new_content:
                    chunks.append(build_chunk(group, render(group), self.count_tokens(render(group))))
                group = [segment]
                group_tokens = segment.token_count
            has_new_content = True

        if group and has_new_content:
            chunks.append(build_chunk(group, render(group), group_tokens))

        return self.reindex_chunks(chunks)

    def _overlap_tail(self, group: list[Segment], separator_tokens: int, incoming_tokens: int) -> list[Segment]:
        if self.overlap_tokens <= 0:
            return []

        tail: list[Segment] = []
        tail_tokens = 0
        for segment in reversed(group):
            added = segment.token_count + (separator_tokens if tail else 0)
            if tail_tokens + added > self.overlap_tokens:
                break
            tail.insert(0, segment)
            tail_tokens += added

        while tail and tail_tokens + separator_tokens + incoming_tokens > self.max_tokens:
            dropped = tail.pop(0)
            tail_tokens -= dropped.token_count + (separator_tokens if tail else 0)
        return tail

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(max_tokens={self.max_tokens}, "
            f"overlap_tokens={self.overlap_tokens}, tokenizer={self.tokenizer.name!r})"
        )
