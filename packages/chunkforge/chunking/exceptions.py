#!/usr/bin/env python3

"""
Custom exceptions for chunking operations.

Every error raised by the chunking engine derives from ChunkingError so callers
can catch the whole family at once, while the more specific classes also derive
from the matching builtin (ValueError, FileNotFoundError) where one applies.
"""

from typing import Any


class ChunkingError(Exception):
    """Base exception for all chunking-related errors."""

    def __init__(
        self,
        detail: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize base chunking error.

        Args:
            detail: Error description
            error_code: Specific error code for categorization
            details: Extra context (offending values, limits)
        """
        super().__init__(detail)
        self.detail = detail
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def __str__(self) -> str:
        return self.detail

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        result: dict[str, Any] = {
            "error_code": self.error_code,
            "detail": self.detail,
            "type": self.__class__.__name__,
        }
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(ChunkingError, ValueError):
    """Raised when splitter or settings parameters violate their invariants.

    Values are never clamped; the offending parameter is reported in ``details``.
    """


class UnknownStrategyError(ConfigurationError):
    """Raised when a strategy or tokenizer name cannot be resolved."""

    def __init__(self, name: str, available: list[str], kind: str = "strategy") -> None:
        super().__init__(
            f"Unknown {kind}: {name}. Available: {', '.join(available)}",
            details={"name": name, "available": available},
        )
        self.name = name
        self.available = available


class TokenizationError(ChunkingError):
    """Raised when the token-counting oracle fails.

    The original exception is kept as ``__cause__`` by raising with ``from``.
    """

    def __init__(self, detail: str, cause: BaseException | None = None) -> None:
        message = f"{detail}: {cause}" if cause is not None else detail
        super().__init__(message, details={"reason": str(cause)} if cause is not None else None)
        self.cause = cause


class SourceFileNotFoundError(ChunkingError, FileNotFoundError):
    """Raised when a file handed to stream_file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File not found: {path}", details={"path": path})
        self.path = path


class InvalidChunkError(ChunkingError):
    """Raised when a chunk is constructed with invalid values."""
