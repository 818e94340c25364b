"""Trivial tokenizer that treats every character as one token."""

from .base import TokenCounter


class CharacterTokenizer(TokenCounter):
    """One token per character. Useful for tests and byte-budgeted consumers."""

    name = "character"

    def count(self, text: str) -> int:
        return len(text) if text else 0

    def encode(self, text: str) -> list[int]:
        return [ord(ch) for ch in text]

    def decode(self, tokens: list[int]) -> str:
        return "".join(chr(token) for token in tokens)

    def truncate(self, text: str, max_tokens: int) -> str:
        if max_tokens <= 0:
            return ""
        return text[:max_tokens]
