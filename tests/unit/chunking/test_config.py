"""Tests for chunking settings."""

import pytest

from chunkforge.chunking.exceptions import ConfigurationError
from chunkforge.chunking.unified import CharacterSplitter, SemanticSplitter
from chunkforge.config import ChunkingSettings, configure, get_settings, reset_settings


def test_defaults() -> None:
    settings = get_settings()
    assert settings.DEFAULT_TOKENIZER == "gpt4"
    assert settings.DEFAULT_STRATEGY == "semantic"
    assert settings.DEFAULT_MAX_TOKENS == 512
    assert settings.DEFAULT_OVERLAP_TOKENS == 0
    assert settings.STREAM_BUFFER_MULTIPLIER == 2
    assert settings.METRICS_ENABLED is True


def test_get_settings_is_shared() -> None:
    assert get_settings() is get_settings()


def test_environment_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHUNKFORGE_DEFAULT_MAX_TOKENS", "256")
    monkeypatch.setenv("CHUNKFORGE_LOG_LEVEL", "debug")
    settings = reset_settings()

    assert settings.DEFAULT_MAX_TOKENS == 256
    assert settings.LOG_LEVEL == "DEBUG"


def test_invalid_environment_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHUNKFORGE_DEFAULT_OVERLAP_TOKENS", "600")
    with pytest.raises(ValueError, match="DEFAULT_OVERLAP_TOKENS must be less than DEFAULT_MAX_TOKENS"):
        ChunkingSettings()


class TestConfigure:
    """Runtime overrides through configure()."""

    def test_overrides_apply_to_new_splitters(self) -> None:
        """Splitters read defaults at construction."""
        configure(default_max_tokens=100, default_overlap_tokens=10, default_tokenizer="character")
        splitter = CharacterSplitter()

        assert splitter.max_tokens == 100
        assert splitter.overlap_tokens == 10
        assert splitter.tokenizer.name == "character"

    def test_explicit_arguments_win(self) -> None:
        configure(default_max_tokens=100)
        assert CharacterSplitter(max_tokens=20, tokenizer="character").max_tokens == 20

    def test_semantic_defaults(self) -> None:
        configure(preserve_sentences=False, default_language="de")
        splitter = SemanticSplitter(max_tokens=50, tokenizer="character")

        assert splitter.preserve_sentences is False
        assert splitter.language == "de"

    def test_unknown_setting(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown setting: nonsense"):
            configure(nonsense=1)

    def test_invalid_combination(self) -> None:
        """Invalid values leave the current settings in place."""
        before = get_settings()
        with pytest.raises(ConfigurationError, match="Invalid settings"):
            configure(default_max_tokens=10, default_overlap_tokens=10)
        assert get_settings() is before

    def test_invalid_log_level(self) -> None:
        with pytest.raises(ConfigurationError):
            configure(log_level="loud")

    def test_reset(self) -> None:
        configure(default_max_tokens=64)
        assert reset_settings().DEFAULT_MAX_TOKENS == 512
