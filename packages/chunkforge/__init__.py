"""
chunkforge: token-bounded text chunking for retrieval pipelines.

Quick use::

    import chunkforge

    chunks = chunkforge.split(text, strategy="semantic", max_tokens=256, overlap_tokens=32)
    for chunk in chunkforge.stream_file("book.txt", strategy="recursive"):
        ...
"""

from collections.abc import Iterator
from pathlib import Path
from typing import Any

from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.exceptions import (
    ChunkingError,
    ConfigurationError,
    InvalidChunkError,
    SourceFileNotFoundError,
    TokenizationError,
    UnknownStrategyError,
)
from chunkforge.chunking.segmentation import NltkSentenceSegmenter, RegexSentenceSegmenter, SentenceSegmenter
from chunkforge.chunking.tokenizers import CharacterTokenizer, TiktokenTokenizer, TokenCounter, create_tokenizer
from chunkforge.chunking.types import ChunkingStrategy
from chunkforge.chunking.unified import (
    AdaptiveOverlapSplitter,
    BaseSplitter,
    CharacterSplitter,
    RecursiveSplitter,
    SemanticSplitter,
    StructureAwareSplitter,
    UnifiedSplitterFactory,
)
from chunkforge.config import ChunkingSettings, configure, get_settings
from chunkforge.version import __version__


def create_splitter(
    strategy: str | ChunkingStrategy | None = None,
    max_tokens: int | None = None,
    overlap_tokens: int | None = None,
    tokenizer: str | TokenCounter | None = None,
    **options: Any,
) -> BaseSplitter:
    """Create a splitter, using configured defaults for anything not given."""
    params = {k: v for k, v in (("max_tokens", max_tokens), ("overlap_tokens", overlap_tokens)) if v is not None}
    if tokenizer is not None:
        params["tokenizer"] = tokenizer
    return UnifiedSplitterFactory.create_splitter(
        strategy or get_settings().DEFAULT_STRATEGY,
        **params,
        **options,
    )


def split(
    text: str | None,
    strategy: str | ChunkingStrategy | None = None,
    max_tokens: int | None = None,
    overlap_tokens: int | None = None,
    tokenizer: str | TokenCounter | None = None,
    **options: Any,
) -> list[Chunk]:
    """
    Split text with the given strategy.

    Args:
        text: Text to split
        strategy: Strategy name, the configured default when omitted
        max_tokens: Upper bound on tokens per chunk
        overlap_tokens: Overlap between consecutive chunks
        tokenizer: Tokenizer name or instance
        **options: Strategy-specific options

    Returns:
        List of chunks
    """
    return create_splitter(strategy, max_tokens, overlap_tokens, tokenizer, **options).split(text)


def stream_file(
    file_path: str | Path,
    strategy: str | ChunkingStrategy | None = None,
    max_tokens: int | None = None,
    overlap_tokens: int | None = None,
    tokenizer: str | TokenCounter | None = None,
    encoding: str = "utf-8",
    **options: Any,
) -> Iterator[Chunk]:
    """Lazily split a file; chunks carry ``index`` and ``source_file`` metadata."""
    splitter = create_splitter(strategy, max_tokens, overlap_tokens, tokenizer, **options)
    return splitter.stream_file(file_path, encoding=encoding)


def count_tokens(text: str, tokenizer: str | TokenCounter | None = None) -> int:
    """
    Count tokens with the given (or default) tokenizer.

    Raises:
        TokenizationError: If the tokenizer fails
    """
    counter = create_tokenizer(tokenizer)
    try:
        return counter.count(text)
    except ChunkingError:
        raise
    except Exception as e:
        raise TokenizationError("Failed to count tokens", e) from e


__all__ = [
    "AdaptiveOverlapSplitter",
    "BaseSplitter",
    "CharacterSplitter",
    "CharacterTokenizer",
    "Chunk",
    "ChunkingError",
    "ChunkingSettings",
    "ChunkingStrategy",
    "ConfigurationError",
    "InvalidChunkError",
    "NltkSentenceSegmenter",
    "RecursiveSplitter",
    "RegexSentenceSegmenter",
    "SemanticSplitter",
    "SentenceSegmenter",
    "SourceFileNotFoundError",
    "StructureAwareSplitter",
    "TiktokenTokenizer",
    "TokenCounter",
    "TokenizationError",
    "UnifiedSplitterFactory",
    "UnknownStrategyError",
    "__version__",
    "configure",
    "count_tokens",
    "create_splitter",
    "create_tokenizer",
    "split",
    "stream_file",
]
