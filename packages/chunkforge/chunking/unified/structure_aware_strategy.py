#!/usr/bin/env python3
"""
Document-structure-aware splitting.

Markdown is cut into header-delimited sections (fenced code is captured
verbatim) and the sections are packed into chunks. Source code is cut at
declaration keywords. Anything else goes to the semantic splitter.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any

from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.domain.value_objects.segment import Segment
from chunkforge.chunking.segmentation import SentenceSegmenter
from chunkforge.chunking.tokenizers import TokenCounter
from chunkforge.chunking.types import ChunkingStrategy
from chunkforge.chunking.unified.base import BaseSplitter
from chunkforge.chunking.unified.semantic_strategy import SemanticSplitter
from chunkforge.chunking.utils import text_utils

logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n"
CODE_FENCE = "```"

_HEADER = re.compile(r"^(#{1,6})\s+(.+)$")
_LIST_ITEM = re.compile(r"^\s*([*+-]|\d+[.)])\s+")
_DECLARATION = re.compile(r"^\s*(def|class|module|function|const|let|var|public|private|protected)\s")


@dataclass
class MarkdownSection:
    """A header (possibly absent) and the lines up to the next header."""

    header: str | None = None
    level: int = 0
    lines: list[str] = field(default_factory=list)

    @property
    def content(self) -> str:
        return "\n".join(self.lines).strip("\n")

    def render(self) -> str:
        if self.header is None:
            return self.content
        heading = f"{'#' * self.level} {self.header}"
        return f"{heading}\n\n{self.content}" if self.content else heading

    @property
    def is_empty(self) -> bool:
        return self.header is None and not self.content.strip()


class StructureAwareSplitter(BaseSplitter):
    """
    Splitter that follows markdown sections and code declarations.

    A fenced code block is never split across chunks unless the block alone is
    larger than max_tokens.
    """

    strategy = ChunkingStrategy.STRUCTURE_AWARE

    def __init__(
        self,
        max_tokens: int | None = None,
        overlap_tokens: int | None = None,
        min_tokens: int | None = None,
        tokenizer: str | TokenCounter | None = None,
        preserve_code_blocks: bool = True,
        preserve_lists: bool = True,
        language: str | None = None,
        segmenter: SentenceSegmenter | None = None,
    ) -> None:
        """
        Initialize the structure-aware splitter.

        Args:
            max_tokens: Upper bound on tokens per chunk
            overlap_tokens: Tokens of whole sections carried into the next chunk
            min_tokens: Minimum chunk size hint
            tokenizer: Tokenizer name or instance
            preserve_code_blocks: Capture fenced code verbatim; header-like lines
                inside a fence do not start sections
            preserve_lists: When a section must be broken up, keep each run of
                list items together where it fits
            language: Language code for the semantic fallback
            segmenter: Sentence-boundary oracle for the semantic fallback
        """
        super().__init__(max_tokens, overlap_tokens, min_tokens, tokenizer)
        self.preserve_code_blocks = preserve_code_blocks
        self.preserve_lists = preserve_lists
        self.language = language
        self.segmenter = segmenter

    def _split(self, text: str) -> list[Chunk]:
        stripped = text.strip()
        if not stripped:
            return []

        if text_utils.is_markdown(stripped):
            return self._split_markdown(stripped)

        token_count = self.count_tokens(stripped)
        if token_count <= self.max_tokens:
            return [self.create_chunk(stripped, token_count, index=0)]
        if text_utils.is_code(stripped):
            return self._split_code(stripped)
        return self._semantic_splitter(self.overlap_tokens).split(stripped)

    # Markdown

    def _split_markdown(self, text: str) -> list[Chunk]:
        sections = self._extract_sections(text)
        logger.debug(f"Extracted {len(sections)} markdown sections")

        token_count = self.count_tokens(text)
        if token_count <= self.max_tokens:
            return [self.create_chunk(text, token_count, index=0, structure=self._structure(sections))]

        segments = []
        section_of: dict[int, MarkdownSection] = {}
        for section in sections:
            rendered = section.render()
            segment = Segment(rendered, self.count_tokens(rendered))
            section_of[id(segment)] = section
            segments.append(segment)

        def build_chunk(group: list[Segment], chunk_text: str, chunk_tokens: int) -> Chunk:
            group_sections = [section_of[id(segment)] for segment in group]
            return self.create_chunk(chunk_text, chunk_tokens, structure=self._structure(group_sections))

        def split_oversized(segment: Segment) -> list[Chunk]:
            return self._split_large_section(section_of[id(segment)])

        return self.pack_segments(segments, SECTION_SEPARATOR, build_chunk, split_oversized)

    def _extract_sections(self, text: str) -> list[MarkdownSection]:
        lines = text.split("\n")
        sections: list[MarkdownSection] = []
        current = MarkdownSection()
        i = 0

        while i < len(lines):
            line = lines[i]
            if self.preserve_code_blocks and line.lstrip().startswith(CODE_FENCE):
                # Consume through the closing fence (or end of input) verbatim
                current.lines.append(line)
                i += 1
                while i < len(lines) and not lines[i].lstrip().startswith(CODE_FENCE):
                    current.lines.append(lines[i])
                    i += 1
                if i < len(lines):
                    current.lines.append(lines[i])
                i += 1
                continue

            match = _HEADER.match(line)
            if match:
                if not current.is_empty:
                    sections.append(current)
                current = MarkdownSection(header=match.group(2).strip(), level=len(match.group(1)))
            else:
                current.lines.append(line)
            i += 1

        if not current.is_empty:
            sections.append(current)
        return sections

    @staticmethod
    def _structure(sections: list[MarkdownSection]) -> dict[str, Any]:
        return {
            "headers": [section.header for section in sections if section.header is not None],
            "levels": [section.level for section in sections],
            "section_count": len(sections),
        }

    def _split_large_section(self, section: MarkdownSection) -> list[Chunk]:
        """Split one oversized section, tagging each piece with the section header."""
        logger.debug(f"Section {section.header!r} exceeds {self.max_tokens} tokens; splitting")
        prose = self._semantic_splitter(0)
        verbatim = self._verbatim_splitter(0)

        pieces: list[Chunk] = []
        for block_text, is_code in self._section_blocks(section):
            pieces.extend((verbatim if is_code else prose).split(block_text))

        headers = [section.header] if section.header is not None else []
        return [
            self.create_chunk(
                piece.text,
                piece.token_count,
                structure={
                    "headers": headers,
                    "levels": [section.level],
                    "section_count": 1,
                    "sub_chunk": i,
                },
            )
            for i, piece in enumerate(pieces)
        ]

    def _section_blocks(self, section: MarkdownSection) -> list[tuple[str, bool]]:
        """
        Break a section into blocks for the semantic splitter.

        Returns (text, is_code) pairs. Fenced code and runs of list items become
        blocks of their own when the matching preserve option is on. The heading
        is prepended to the first block unless that would push a code block over
        the limit.
        """
        blocks: list[tuple[str, bool]] = []
        heading = f"{'#' * section.level} {section.header}" if section.header is not None else None
        current: list[str] = []
        current_kind = "text"

        def flush() -> None:
            nonlocal heading
            block = "\n".join(current).strip("\n")
            current.clear()
            if not block.strip():
                return
            is_code = current_kind == "code"
            if heading is not None:
                combined = f"{heading}\n\n{block}"
                if not is_code or self.fits(combined):
                    block = combined
                else:
                    blocks.append((heading, False))
                heading = None
            blocks.append((block, is_code))

        lines = section.lines
        i = 0
        while i < len(lines):
            line = lines[i]
            if self.preserve_code_blocks and line.lstrip().startswith(CODE_FENCE):
                flush()
                current_kind = "code"
                current.append(line)
                i += 1
                while i < len(lines) and not lines[i].lstrip().startswith(CODE_FENCE):
                    current.append(lines[i])
                    i += 1
                if i < len(lines):
                    current.append(lines[i])
                flush()
                current_kind = "text"
                i += 1
                continue

            kind = "list" if self.preserve_lists and _LIST_ITEM.match(line) else "text"
            if kind != current_kind and line.strip():
                flush()
                current_kind = kind
            current.append(line)
            i += 1

        flush()
        if heading is not None:
            blocks.append((heading, False))
        return blocks

    # Code

    def _split_code(self, text: str) -> list[Chunk]:
        blocks = self._extract_code_blocks(text)
        logger.debug(f"Extracted {len(blocks)} code blocks")

        splitter = self._verbatim_splitter(self.overlap_tokens)
        chunks: list[Chunk] = []
        for block in blocks:
            chunks.extend(splitter.split(block))
        return self.reindex_chunks(chunks)

    @staticmethod
    def _extract_code_blocks(text: str) -> list[str]:
        blocks: list[str] = []
        current: list[str] = []

        for line in text.split("\n"):
            if _DECLARATION.match(line) and current:
                blocks.append("\n".join(current))
                current = []
            current.append(line)

        if current:
            blocks.append("\n".join(current))
        return [block for block in blocks if block.strip()]

    def _semantic_splitter(self, overlap_tokens: int) -> SemanticSplitter:
        return SemanticSplitter(
            max_tokens=self.max_tokens,
            overlap_tokens=overlap_tokens,
            min_tokens=self.min_tokens,
            tokenizer=self.tokenizer,
            language=self.language,
            segmenter=self.segmenter,
        )

    def _verbatim_splitter(self, overlap_tokens: int) -> SemanticSplitter:
        # Code keeps its whitespace and is cut by characters, not sentences
        return SemanticSplitter(
            max_tokens=self.max_tokens,
            overlap_tokens=overlap_tokens,
            min_tokens=self.min_tokens,
            tokenizer=self.tokenizer,
            preserve_sentences=False,
            normalize_whitespace=False,
        )
