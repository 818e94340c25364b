#!/usr/bin/env python3
"""
Chunk entity representing a single text chunk.

A Chunk never changes after construction. Its metadata is stored as a read-only
mapping (nested mappings and lists are frozen as well), and every operation that
looks like an update returns a new Chunk.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from chunkforge.chunking.exceptions import InvalidChunkError


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, list | tuple):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


class Chunk:
    """
    Entity representing a single text chunk.

    Recognized metadata keys are ``index``, ``start_offset``, ``end_offset``,
    ``source_file``, ``structure``, ``segment_count``, ``overlap_tokens`` and
    ``adaptive_overlap``; strategies may add others.
    """

    __slots__ = ("_metadata", "_text", "_token_count")

    def __init__(
        self,
        text: str,
        metadata: Mapping[str, Any] | None = None,
        token_count: int | None = None,
    ) -> None:
        """
        Initialize a chunk.

        Args:
            text: The chunk text
            metadata: Metadata to copy and freeze
            token_count: Token count from the splitter's tokenizer; defaults to len(text)

        Raises:
            InvalidChunkError: If text is not a string or token_count is negative
        """
        if not isinstance(text, str):
            raise InvalidChunkError(f"Chunk text must be a string, got {type(text).__name__}")
        if token_count is None:
            token_count = len(text)
        if token_count < 0:
            raise InvalidChunkError(
                f"Token count cannot be negative, got {token_count}",
                details={"token_count": token_count},
            )

        self._text = text
        self._token_count = token_count
        self._metadata: Mapping[str, Any] = _freeze(dict(metadata or {}))

    @property
    def text(self) -> str:
        return self._text

    @property
    def token_count(self) -> int:
        return self._token_count

    @property
    def metadata(self) -> Mapping[str, Any]:
        """Read-only view of the chunk metadata."""
        return self._metadata

    @property
    def index(self) -> int | None:
        return self._metadata.get("index")

    @property
    def start_offset(self) -> int | None:
        return self._metadata.get("start_offset")

    @property
    def end_offset(self) -> int | None:
        return self._metadata.get("end_offset")

    @property
    def source_file(self) -> str | None:
        return self._metadata.get("source_file")

    @property
    def structure(self) -> Mapping[str, Any] | None:
        return self._metadata.get("structure")

    def with_metadata(self, **updates: Any) -> "Chunk":
        """Return a new chunk with ``updates`` merged into the metadata."""
        merged = dict(self._metadata)
        merged.update(updates)
        return Chunk(self._text, merged, self._token_count)

    def without_metadata(self, *keys: str) -> "Chunk":
        """Return a new chunk with the given metadata keys removed."""
        kept = {key: value for key, value in self._metadata.items() if key not in keys}
        return Chunk(self._text, kept, self._token_count)

    def is_oversized(self, max_tokens: int) -> bool:
        """
        Check whether this chunk exceeds a token bound.

        Splitters emit an indivisible unit that alone is larger than max_tokens as
        a single oversized chunk instead of truncating it; this is how callers
        detect that case.
        """
        return self._token_count > max_tokens

    def to_dict(self) -> dict[str, Any]:
        """Convert the chunk to plain, JSON-serializable values."""
        return {
            "text": self._text,
            "token_count": self._token_count,
            "metadata": _thaw(self._metadata),
        }

    def __len__(self) -> int:
        return len(self._text)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chunk):
            return NotImplemented
        return self._text == other._text and _thaw(self._metadata) == _thaw(other._metadata)

    def __hash__(self) -> int:
        return hash(self._text)

    def __repr__(self) -> str:
        preview = self._text[:40] + "..." if len(self._text) > 40 else self._text
        return f"Chunk(index={self.index}, tokens={self._token_count}, text={preview!r})"
