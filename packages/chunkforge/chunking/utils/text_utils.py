#!/usr/bin/env python3
"""
Text helpers used by the splitting strategies.

Covers Unicode normalization and whitespace cleanup, the regex sentence and
paragraph splitters that back the default segmenter, content classification
(code / markdown) and a few string comparisons used by the adaptive overlap
strategy and the CLI validator.
"""

import re
import unicodedata

_HORIZONTAL_WHITESPACE = re.compile(r"[^\S\n]+")
_SPACES_AROUND_NEWLINE = re.compile(r" *\n *")
_EXCESS_NEWLINES = re.compile(r"\n{3,}")
_PARAGRAPH_BREAK = re.compile(r"\n\n+")

# A run of text up to and including terminal punctuation, or a trailing remainder
_SENTENCE_PIECE = re.compile(r"[^.!?]*[.!?]+|[^.!?]+$")
_SENTENCE_END = re.compile(r"[.!?]+$")
# "Dr." / "U." style abbreviations do not end a sentence
_ABBREVIATION = re.compile(r"\b[A-Z][a-z]?\.$")

_CODE_INDICATORS = [
    re.compile(r"^\s*(def|class|module|function|const|let|var|import|export|public|private)\s"),
    re.compile(r"[{}\[\]();].*[{}\[\]();]"),
    re.compile(r"^\s{2,}"),
    re.compile(r"=>|->|==|!=|<=|>="),
]
CODE_LINE_RATIO = 0.3

_MARKDOWN_INDICATORS = [
    re.compile(r"^#{1,6}\s"),
    re.compile(r"^\*\*|__"),
    re.compile(r"^\*|^-|^\d+\."),
    re.compile(r"```"),
    re.compile(r"\[.*\]\(.*\)"),
]


def normalize(text: str) -> str:
    """Apply Unicode NFKC normalization."""
    return unicodedata.normalize("NFKC", text)


def clean(text: str, remove_extra_whitespace: bool = True) -> str:
    """
    Normalize text for splitting.

    Collapses horizontal whitespace, removes spaces around newlines and caps
    blank-line runs at one, keeping paragraph breaks intact.

    Args:
        text: Raw text
        remove_extra_whitespace: When False only NFKC normalization and stripping
            are applied, so indentation survives

    Returns:
        The cleaned text
    """
    normalized = normalize(text)
    if not remove_extra_whitespace:
        return normalized.strip()

    cleaned = _HORIZONTAL_WHITESPACE.sub(" ", normalized)
    cleaned = _SPACES_AROUND_NEWLINE.sub("\n", cleaned)
    cleaned = _EXCESS_NEWLINES.sub("\n\n", cleaned)
    return cleaned.strip()


def simple_sentence_split(text: str) -> list[str]:
    """
    Split text into sentences with a punctuation heuristic.

    A piece ending in ``.``, ``!`` or ``?`` closes a sentence unless it ends in a
    short capitalized abbreviation such as ``Dr.``.
    """
    sentences: list[str] = []
    current = ""

    for match in _SENTENCE_PIECE.finditer(text):
        piece = match.group(0)
        if not piece:
            continue
        current += piece
        if _SENTENCE_END.search(piece) and not _ABBREVIATION.search(piece):
            if current.strip():
                sentences.append(current.strip())
            current = ""

    if current.strip():
        sentences.append(current.strip())
    return sentences


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines, dropping empty paragraphs."""
    return [paragraph.strip() for paragraph in _PARAGRAPH_BREAK.split(text) if paragraph.strip()]


def split_lines(text: str) -> list[str]:
    return [line.strip() for line in text.split("\n")]


def is_code(text: str) -> bool:
    """Return True if more than 30% of the lines look like source code."""
    lines = text.split("\n")
    if not lines or not text:
        return False

    code_lines = sum(1 for line in lines if any(p.search(line) for p in _CODE_INDICATORS))
    return code_lines / len(lines) > CODE_LINE_RATIO


def is_markdown(text: str) -> bool:
    """Return True if any line carries a header, emphasis, list, fence or link marker."""
    return any(
        pattern.search(line) for line in text.split("\n") for pattern in _MARKDOWN_INDICATORS
    )


def find_overlap(first: str, second: str, min_overlap: int = 10) -> str | None:
    """
    Find the longest suffix of ``first`` that is also a prefix of ``second``.

    Args:
        first: Preceding text
        second: Following text
        min_overlap: Shortest overlap worth reporting

    Returns:
        The shared text, or None when no overlap of at least ``min_overlap``
        characters exists
    """
    if not first or not second:
        return None

    for length in range(min(len(first), len(second)), max(min_overlap, 1) - 1, -1):
        if first[-length:] == second[:length]:
            return first[-length:]
    return None


def similarity(first: str, second: str) -> float:
    """Jaccard similarity of the lowercased word sets of two strings."""
    if first == second:
        return 1.0
    words_first = set(first.lower().split())
    words_second = set(second.lower().split())
    if not words_first or not words_second:
        return 0.0
    return len(words_first & words_second) / len(words_first | words_second)


def truncate(text: str, max_length: int, suffix: str = "...") -> str:
    """Shorten text to ``max_length`` characters, cutting at a word boundary when possible."""
    if len(text) <= max_length:
        return text

    truncated = text[: max(max_length - len(suffix), 0)]
    last_space = truncated.rfind(" ")
    if last_space > 0:
        truncated = truncated[:last_space]
    return truncated + suffix
