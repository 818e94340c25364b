#!/usr/bin/env python3
"""
Splitter configuration value object.

Holds the token limits shared by every splitting strategy and enforces their
invariants at construction time.
"""

from dataclasses import dataclass
from typing import Any

from chunkforge.chunking.exceptions import ConfigurationError


@dataclass(frozen=True)
class SplitterConfig:
    """
    Immutable token limits for a splitter.

    Invariants: max_tokens > 0, 0 <= overlap_tokens < max_tokens, min_tokens >= 0.
    """

    max_tokens: int
    overlap_tokens: int = 0
    min_tokens: int = 0

    def __post_init__(self) -> None:
        """Validate the limits; nothing is clamped."""
        for name in ("max_tokens", "overlap_tokens", "min_tokens"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{name} must be an integer, got {type(value).__name__}",
                    details={name: value},
                )

        if self.max_tokens <= 0:
            raise ConfigurationError(
                "max_tokens must be positive",
                details={"max_tokens": self.max_tokens},
            )
        if self.overlap_tokens < 0:
            raise ConfigurationError(
                "overlap_tokens cannot be negative",
                details={"overlap_tokens": self.overlap_tokens},
            )
        if self.overlap_tokens >= self.max_tokens:
            raise ConfigurationError(
                "overlap_tokens must be less than max_tokens",
                details={"overlap_tokens": self.overlap_tokens, "max_tokens": self.max_tokens},
            )
        if self.min_tokens < 0:
            raise ConfigurationError(
                "min_tokens cannot be negative",
                details={"min_tokens": self.min_tokens},
            )

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_tokens": self.max_tokens,
            "overlap_tokens": self.overlap_tokens,
            "min_tokens": self.min_tokens,
        }
