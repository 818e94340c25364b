#!/usr/bin/env python3
"""
Sentence-boundary oracles.

Splitters receive a SentenceSegmenter once, at construction. The regex segmenter
is always available; the NLTK one needs the optional ``nlp`` extra and the punkt
models.
"""

import logging
from typing import Protocol, runtime_checkable

from chunkforge.chunking.exceptions import ChunkingError, ConfigurationError, TokenizationError
from chunkforge.chunking.utils import text_utils

logger = logging.getLogger(__name__)

NLTK_LANGUAGES: dict[str, str] = {
    "cs": "czech",
    "da": "danish",
    "de": "german",
    "el": "greek",
    "en": "english",
    "es": "spanish",
    "et": "estonian",
    "fi": "finnish",
    "fr": "french",
    "it": "italian",
    "nl": "dutch",
    "no": "norwegian",
    "pl": "polish",
    "pt": "portuguese",
    "ru": "russian",
    "sl": "slovene",
    "sv": "swedish",
    "tr": "turkish",
}


@runtime_checkable
class SentenceSegmenter(Protocol):
    """Anything that can split text into sentences for a language code."""

    def segment(self, text: str, language: str = "en") -> list[str]: ...


class RegexSentenceSegmenter:
    """Punctuation-based fallback; ignores the language."""

    def segment(self, text: str, language: str = "en") -> list[str]:
        return text_utils.simple_sentence_split(text)

    def __repr__(self) -> str:
        return "RegexSentenceSegmenter()"


class NltkSentenceSegmenter:
    """Sentence segmentation through ``nltk.sent_tokenize`` (punkt)."""

    def __init__(self, language: str = "en") -> None:
        """
        Load NLTK and check that punkt data exists for ``language``.

        Raises:
            ConfigurationError: If nltk is not installed, the language is not
                supported or the punkt data is missing
        """
        try:
            import nltk
        except ImportError as e:
            raise ConfigurationError(
                "NltkSentenceSegmenter requires nltk; install chunkforge[nlp]"
            ) from e

        self._nltk = nltk
        self.language = language
        self._nltk_language = self._resolve_language(language)
        try:
            nltk.sent_tokenize("Probe sentence.", language=self._nltk_language)
        except LookupError as e:
            raise ConfigurationError(
                f"NLTK punkt data missing for {self._nltk_language}; run nltk.download('punkt_tab')",
                details={"language": language},
            ) from e
        logger.debug(f"NLTK sentence segmenter ready for {self._nltk_language}")

    @staticmethod
    def _resolve_language(language: str) -> str:
        if language in NLTK_LANGUAGES.values():
            return language
        try:
            return NLTK_LANGUAGES[language]
        except KeyError as e:
            raise ConfigurationError(
                f"Unsupported segmentation language: {language}",
                details={"language": language, "supported": sorted(NLTK_LANGUAGES)},
            ) from e

    def segment(self, text: str, language: str | None = None) -> list[str]:
        nltk_language = self._nltk_language if language is None else self._resolve_language(language)
        sentences = self._nltk.sent_tokenize(text, language=nltk_language)
        return [sentence.strip() for sentence in sentences if sentence.strip()]

    def __repr__(self) -> str:
        return f"NltkSentenceSegmenter(language={self.language!r})"


def resolve_segmenter(segmenter: SentenceSegmenter | None) -> SentenceSegmenter:
    """Return the given segmenter or the regex fallback."""
    if segmenter is None:
        return RegexSentenceSegmenter()
    if not isinstance(segmenter, SentenceSegmenter):
        raise ConfigurationError(
            f"segmenter must provide segment(text, language), got {type(segmenter).__name__}"
        )
    return segmenter


def segment_sentences(segmenter: SentenceSegmenter, text: str, language: str) -> list[str]:
    """
    Run a segmenter, wrapping its failures.

    Raises:
        TokenizationError: If the segmenter raises anything but a ChunkingError
    """
    try:
        return segmenter.segment(text, language)
    except ChunkingError:
        raise
    except Exception as e:
        raise TokenizationError("Sentence segmentation failed", e) from e
