"""Shared test configuration and fixtures."""

from collections.abc import Generator

import pytest

from chunkforge.chunking.exceptions import TokenizationError
from chunkforge.chunking.tokenizers import CharacterTokenizer, TiktokenTokenizer, TokenCounter
from chunkforge.config import reset_settings


class WordTokenizer(TokenCounter):
    """Counts whitespace-separated words; deterministic and offline."""

    name = "words"

    def count(self, text: str) -> int:
        return len(text.split())

    def encode(self, text: str) -> list[int]:
        return list(range(self.count(text)))

    def decode(self, tokens: list[int]) -> str:
        raise NotImplementedError


@pytest.fixture(autouse=True)
def _reset_chunking_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Give every test environment-free default settings."""
    for var in (
        "CHUNKFORGE_DEFAULT_TOKENIZER",
        "CHUNKFORGE_DEFAULT_STRATEGY",
        "CHUNKFORGE_DEFAULT_MAX_TOKENS",
        "CHUNKFORGE_DEFAULT_OVERLAP_TOKENS",
        "CHUNKFORGE_METRICS_ENABLED",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    yield
    monkeypatch.undo()
    reset_settings()


@pytest.fixture()
def char_tokenizer() -> CharacterTokenizer:
    return CharacterTokenizer()


@pytest.fixture()
def word_tokenizer() -> WordTokenizer:
    return WordTokenizer()


@pytest.fixture()
def tiktoken_tokenizer() -> TiktokenTokenizer:
    """cl100k_base counter; skipped when the encoding cannot be fetched."""
    try:
        return TiktokenTokenizer("gpt4")
    except TokenizationError as e:
        pytest.skip(f"tiktoken encoding unavailable: {e}")
