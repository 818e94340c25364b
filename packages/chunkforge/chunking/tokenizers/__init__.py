"""
Token counters and the name-based tokenizer factory.
"""

import tiktoken

from chunkforge.chunking.exceptions import UnknownStrategyError
from chunkforge.config import get_settings

from .base import TokenCounter
from .character import CharacterTokenizer
from .tiktoken_tokenizer import MODEL_ENCODINGS, TiktokenTokenizer

CHARACTER_TOKENIZER_NAMES = {"character", "char", "chars"}


def available_tokenizers() -> list[str]:
    """Names accepted by create_tokenizer."""
    return sorted(CHARACTER_TOKENIZER_NAMES | set(MODEL_ENCODINGS) | set(tiktoken.list_encoding_names()))


def create_tokenizer(
    spec: str | TokenCounter | None = None,
    use_cache: bool | None = None,
) -> TokenCounter:
    """
    Resolve a tokenizer specification into a TokenCounter.

    Args:
        spec: A TokenCounter instance (returned unchanged), a tokenizer name, or
            None for the configured default
        use_cache: Override the CACHE_TOKENIZATION setting for tiktoken counters

    Returns:
        The resolved TokenCounter

    Raises:
        UnknownStrategyError: If the name is not a known model, encoding or
            the character tokenizer
        TokenizationError: If the tiktoken encoding cannot be loaded
    """
    if isinstance(spec, TokenCounter):
        return spec

    settings = get_settings()
    name = (spec or settings.DEFAULT_TOKENIZER).strip().lower()

    if name in CHARACTER_TOKENIZER_NAMES:
        return CharacterTokenizer()

    if name in MODEL_ENCODINGS or name in tiktoken.list_encoding_names():
        return TiktokenTokenizer(
            name,
            use_cache=settings.CACHE_TOKENIZATION if use_cache is None else use_cache,
            cache_size=settings.TOKENIZER_CACHE_SIZE,
        )

    raise UnknownStrategyError(name, available_tokenizers(), kind="tokenizer")


__all__ = [
    "MODEL_ENCODINGS",
    "CharacterTokenizer",
    "TiktokenTokenizer",
    "TokenCounter",
    "available_tokenizers",
    "create_tokenizer",
]
