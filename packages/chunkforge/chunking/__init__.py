"""
Chunking engine: token-bounded text splitting strategies.

Strategies live in ``chunkforge.chunking.unified``; this package root only
re-exports the lightweight shared pieces so that ``chunkforge.config`` can
import the exception hierarchy without pulling the strategies in.
"""

from .exceptions import (
    ChunkingError,
    ConfigurationError,
    InvalidChunkError,
    SourceFileNotFoundError,
    TokenizationError,
    UnknownStrategyError,
)
from .types import ChunkingStrategy

__all__ = [
    "ChunkingError",
    "ChunkingStrategy",
    "ConfigurationError",
    "InvalidChunkError",
    "SourceFileNotFoundError",
    "TokenizationError",
    "UnknownStrategyError",
]
