#!/usr/bin/env python3
"""
Tiktoken-backed token counter.

Model names are mapped to their tiktoken encodings; raw encoding names such as
``cl100k_base`` are accepted as well. Counts can be memoized in a bounded LRU
cache shared by all threads using the tokenizer.
"""

import logging
import threading
from collections import OrderedDict

import tiktoken

from chunkforge.chunking.exceptions import TokenizationError

from .base import TokenCounter

logger = logging.getLogger(__name__)

MODEL_ENCODINGS: dict[str, str] = {
    "gpt35_turbo": "cl100k_base",
    "gpt4": "cl100k_base",
    "gpt4_turbo": "cl100k_base",
    "gpt4o": "o200k_base",
    # Approximation; Claude's tokenizer is not public
    "claude": "cl100k_base",
    "text_davinci_003": "p50k_base",
    "text_davinci_002": "p50k_base",
    "code_davinci_002": "p50k_base",
}


class TiktokenTokenizer(TokenCounter):
    """
    Token counter built on a tiktoken encoding.

    Every failure of the underlying library surfaces as TokenizationError with
    the original exception chained.
    """

    def __init__(self, model: str = "gpt4", use_cache: bool = True, cache_size: int = 4096) -> None:
        """
        Initialize the tokenizer.

        Args:
            model: Model alias (see MODEL_ENCODINGS) or tiktoken encoding name
            use_cache: Memoize counts per text
            cache_size: Maximum number of cached counts

        Raises:
            TokenizationError: If the encoding cannot be loaded
        """
        self.model = model
        self.encoding_name = MODEL_ENCODINGS.get(model, model)
        self.name = model
        self.use_cache = use_cache
        self.cache_size = cache_size
        self._cache: OrderedDict[str, int] = OrderedDict()
        self._lock = threading.Lock()

        try:
            self._encoding = tiktoken.get_encoding(self.encoding_name)
        except Exception as e:
            raise TokenizationError(f"Failed to load encoding {self.encoding_name}", e) from e

        logger.debug(f"Loaded tiktoken encoding {self.encoding_name} for model {model}")

    def count(self, text: str) -> int:
        if not text:
            return 0
        if not self.use_cache:
            return len(self.encode(text))

        with self._lock:
            cached = self._cache.get(text)
            if cached is not None:
                self._cache.move_to_end(text)
                return cached

        count = len(self.encode(text))

        with self._lock:
            self._cache[text] = count
            if len(self._cache) > self.cache_size:
                self._cache.popitem(last=False)
        return count

    def encode(self, text: str) -> list[int]:
        try:
            return self._encoding.encode(text, disallowed_special=())
        except Exception as e:
            raise TokenizationError("Failed to count tokens", e) from e

    def decode(self, tokens: list[int]) -> str:
        try:
            return self._encoding.decode(tokens)
        except Exception as e:
            raise TokenizationError("Failed to decode tokens", e) from e

    def truncate(self, text: str, max_tokens: int) -> str:
        if not text or max_tokens <= 0:
            return ""
        tokens = self.encode(text)
        if len(tokens) <= max_tokens:
            return text
        return self.decode(tokens[:max_tokens])

    def clear_cache(self) -> None:
        """Drop all memoized counts."""
        with self._lock:
            self._cache.clear()

    @property
    def cache_info(self) -> dict[str, int]:
        with self._lock:
            return {"size": len(self._cache), "max_size": self.cache_size}
