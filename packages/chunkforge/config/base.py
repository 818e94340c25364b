# chunkforge/config/base.py

from typing import Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ChunkingSettings(BaseSettings):
    """
    Process-wide defaults for the chunking engine.

    Every field can be overridden through a ``CHUNKFORGE_``-prefixed environment
    variable or a ``.env`` file. Splitters fall back to these values for any
    parameter the caller does not pass explicitly.
    """

    # Tokenizer Configuration
    DEFAULT_TOKENIZER: str = "gpt4"
    CACHE_TOKENIZATION: bool = True
    TOKENIZER_CACHE_SIZE: int = 4096

    # Splitter Defaults
    DEFAULT_STRATEGY: str = "semantic"
    DEFAULT_MAX_TOKENS: int = 512
    DEFAULT_OVERLAP_TOKENS: int = 0
    DEFAULT_MIN_TOKENS: int = 0

    # Semantic Splitting
    PRESERVE_SENTENCES: bool = True
    DEFAULT_LANGUAGE: str = "en"

    # Streaming
    STREAM_BUFFER_MULTIPLIER: int = 2

    # Observability
    METRICS_ENABLED: bool = True
    LOG_LEVEL: str = "WARNING"

    model_config = SettingsConfigDict(
        env_prefix="CHUNKFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Invalid log level: {v}")
        return level

    @field_validator("TOKENIZER_CACHE_SIZE", "STREAM_BUFFER_MULTIPLIER")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @model_validator(mode="after")
    def validate_token_limits(self) -> Self:
        if self.DEFAULT_MAX_TOKENS <= 0:
            raise ValueError("DEFAULT_MAX_TOKENS must be positive")
        if self.DEFAULT_OVERLAP_TOKENS < 0:
            raise ValueError("DEFAULT_OVERLAP_TOKENS cannot be negative")
        if self.DEFAULT_OVERLAP_TOKENS >= self.DEFAULT_MAX_TOKENS:
            raise ValueError("DEFAULT_OVERLAP_TOKENS must be less than DEFAULT_MAX_TOKENS")
        if self.DEFAULT_MIN_TOKENS < 0:
            raise ValueError("DEFAULT_MIN_TOKENS cannot be negative")
        return self
