"""Tests for the adaptive overlap splitting strategy."""

import pytest

from chunkforge.chunking.exceptions import ConfigurationError, TokenizationError
from chunkforge.chunking.segmentation import RegexSentenceSegmenter
from chunkforge.chunking.tokenizers import CharacterTokenizer
from chunkforge.chunking.unified import AdaptiveOverlapSplitter

A = "The cat sat on the mat."
B = "The cat was very happy."
C = "Dogs bark at the mailman."
D = "The mailman runs away fast."
TEXT = " ".join([A, B, C, D])


def _splitter(tokenizer: CharacterTokenizer, **kwargs) -> AdaptiveOverlapSplitter:
    params = {
        "max_tokens": 80,
        "overlap_tokens": 20,
        "min_overlap_tokens": 10,
        "max_overlap_tokens": 30,
        "tokenizer": tokenizer,
    }
    params.update(kwargs)
    return AdaptiveOverlapSplitter(**params)


def test_overlap_prefixes_trailing_sentence(char_tokenizer: CharacterTokenizer) -> None:
    chunks = _splitter(char_tokenizer).split(TEXT)

    assert [chunk.text for chunk in chunks] == [f"{A} {B} {C}", f"{C} {D}"]
    assert chunks[0].metadata["overlap_tokens"] == 0
    assert chunks[1].metadata["overlap_tokens"] == len(C)
    assert all(chunk.metadata["adaptive_overlap"] is True for chunk in chunks)
    assert [chunk.index for chunk in chunks] == [0, 1]


def test_dissimilar_sentences_not_repeated(char_tokenizer: CharacterTokenizer) -> None:
    """With no minimum, overlap needs enough word similarity."""
    chunks = _splitter(char_tokenizer, min_overlap_tokens=0, similarity_threshold=0.3).split(TEXT)

    assert chunks[1].text == D
    assert chunks[1].metadata["overlap_tokens"] == 0


def test_lower_threshold_admits_overlap(char_tokenizer: CharacterTokenizer) -> None:
    chunks = _splitter(char_tokenizer, min_overlap_tokens=0, similarity_threshold=0.1).split(TEXT)

    assert chunks[1].text == f"{C} {D}"


def test_overlap_trimmed_to_fit_budget(char_tokenizer: CharacterTokenizer) -> None:
    """Overlap that would overflow is cut to trailing words."""
    chunks = _splitter(char_tokenizer, max_tokens=60).split(TEXT)

    assert chunks[1].text == f"happy. {C} {D}"
    assert chunks[1].token_count == 60
    assert chunks[1].metadata["overlap_tokens"] == len("happy.")


def test_single_chunk_unchanged(char_tokenizer: CharacterTokenizer) -> None:
    chunks = _splitter(char_tokenizer).split(A)

    assert [chunk.text for chunk in chunks] == [A]
    assert "adaptive_overlap" not in chunks[0].metadata


def test_default_target_overlap(char_tokenizer: CharacterTokenizer) -> None:
    splitter = AdaptiveOverlapSplitter(max_tokens=200, tokenizer=char_tokenizer)
    assert splitter.overlap_tokens == 50


def test_chunks_respect_bounds(char_tokenizer: CharacterTokenizer) -> None:
    text = " ".join(f"Sentence number {i} talks about topic {i % 3}." for i in range(30))
    chunks = _splitter(
        char_tokenizer, max_tokens=120, overlap_tokens=30, min_overlap_tokens=10, max_overlap_tokens=50
    ).split(text)

    assert len(chunks) > 2
    for chunk in chunks:
        assert chunk.token_count <= 120
        assert chunk.metadata["overlap_tokens"] <= 50

def test_segmenter_failure_during_overlap_wrapped(char_tokenizer: CharacterTokenizer) -> None:
    """A segmenter that breaks after the initial packing still surfaces as TokenizationError."""

    class OneShotSegmenter(RegexSentenceSegmenter):
        def __init__(self) -> None:
            self.calls = 0

        def segment(self, text: str, language: str = "en") -> list[str]:
            self.calls += 1
            if self.calls > 1:
                raise RuntimeError("segmenter crashed")
            return super().segment(text, language)

    segmenter = OneShotSegmenter()
    with pytest.raises(TokenizationError, match="segmenter crashed"):
        _splitter(char_tokenizer, segmenter=segmenter).split(TEXT)
    assert segmenter.calls == 2


class TestAdaptiveValidation:
    """Parameter validation."""

    def test_max_overlap_must_be_below_max_tokens(self, char_tokenizer: CharacterTokenizer) -> None:
        with pytest.raises(ConfigurationError, match="max_overlap_tokens must be less than max_tokens"):
            _splitter(char_tokenizer, max_tokens=30)

    def test_min_overlap_not_above_max_overlap(self, char_tokenizer: CharacterTokenizer) -> None:
        with pytest.raises(ConfigurationError, match="cannot be greater than max_overlap_tokens"):
            _splitter(char_tokenizer, min_overlap_tokens=40)

    def test_negative_min_overlap(self, char_tokenizer: CharacterTokenizer) -> None:
        with pytest.raises(ConfigurationError, match="min_overlap_tokens cannot be negative"):
            _splitter(char_tokenizer, min_overlap_tokens=-1)

    @pytest.mark.parametrize("threshold", [-0.1, 1.5])
    def test_threshold_range(self, char_tokenizer: CharacterTokenizer, threshold: float) -> None:
        with pytest.raises(ConfigurationError, match="similarity_threshold must be between 0 and 1"):
            _splitter(char_tokenizer, similarity_threshold=threshold)
