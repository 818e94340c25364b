#!/usr/bin/env python3
"""
Token-counting oracle interface.

Every splitting strategy measures text exclusively through a TokenCounter, so any
deterministic tokenizer can be plugged in.
"""

from abc import ABC, abstractmethod


class TokenCounter(ABC):
    """
    Abstract token-counting oracle.

    Implementations must be deterministic: the same text always yields the same
    count. Counts are not assumed to be proportional to character length.
    """

    name: str = "base"

    @abstractmethod
    def count(self, text: str) -> int:
        """Return the number of tokens in ``text``."""

    @abstractmethod
    def encode(self, text: str) -> list[int]:
        """Encode ``text`` into token ids."""

    @abstractmethod
    def decode(self, tokens: list[int]) -> str:
        """Decode token ids back into text."""

    def truncate(self, text: str, max_tokens: int) -> str:
        """
        Return the longest prefix of ``text`` with at most ``max_tokens`` tokens.

        Binary-searches the prefix length, so it works for any counter whose
        counts grow with the prefix.

        Args:
            text: Text to truncate
            max_tokens: Token budget

        Returns:
            The truncated prefix (possibly empty)
        """
        if not text or max_tokens <= 0:
            return ""
        if self.count(text) <= max_tokens:
            return text

        low, high = 0, len(text)
        best = 0
        while low <= high:
            mid = (low + high) // 2
            if self.count(text[:mid]) <= max_tokens:
                best = mid
                low = mid + 1
            else:
                high = mid - 1
        return text[:best]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
