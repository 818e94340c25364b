"""Tests for the structure-aware splitting strategy."""

from chunkforge.chunking.tokenizers import CharacterTokenizer
from chunkforge.chunking.unified import SemanticSplitter, StructureAwareSplitter
from chunkforge.chunking.unified.structure_aware_strategy import MarkdownSection

MARKDOWN_DOC = """# Intro

Some intro text here.

## Code

```python
def f():
# not a header
    return 1
```

## Outro

Final words here.
"""

PROSE = "Alpha beta gamma delta. Epsilon zeta eta theta. Iota kappa lambda mu. Nu xi omicron pi."

CODE = """import os

def alpha():
    return 1

def beta():
    return 2"""


def test_markdown_sections_become_chunks(char_tokenizer: CharacterTokenizer) -> None:
    chunks = StructureAwareSplitter(max_tokens=70, tokenizer=char_tokenizer).split(MARKDOWN_DOC)

    assert [chunk.text for chunk in chunks] == [
        "# Intro\n\nSome intro text here.",
        "## Code\n\n```python\ndef f():\n# not a header\n    return 1\n```",
        "## Outro\n\nFinal words here.",
    ]
    assert [chunk.structure["headers"] for chunk in chunks] == [("Intro",), ("Code",), ("Outro",)]
    assert [chunk.structure["levels"] for chunk in chunks] == [(1,), (2,), (2,)]
    assert all(chunk.structure["section_count"] == 1 for chunk in chunks)
    assert [chunk.index for chunk in chunks] == [0, 1, 2]


def test_header_lines_inside_fences_are_content(char_tokenizer: CharacterTokenizer) -> None:
    chunks = StructureAwareSplitter(max_tokens=70, tokenizer=char_tokenizer).split(MARKDOWN_DOC)

    headers = [header for chunk in chunks for header in chunk.structure["headers"]]
    assert "not a header" not in headers
    fenced = [chunk for chunk in chunks if "```python" in chunk.text]
    assert len(fenced) == 1
    assert fenced[0].text.count("```") == 2


def test_small_sections_are_packed(char_tokenizer: CharacterTokenizer) -> None:
    chunks = StructureAwareSplitter(max_tokens=100, tokenizer=char_tokenizer).split(MARKDOWN_DOC)

    assert chunks[0].structure["headers"] == ("Intro", "Code")
    assert chunks[0].structure["section_count"] == 2
    assert chunks[-1].structure["headers"] == ("Outro",)


def test_markdown_that_fits_is_one_chunk(char_tokenizer: CharacterTokenizer) -> None:
    chunks = StructureAwareSplitter(max_tokens=1000, tokenizer=char_tokenizer).split(MARKDOWN_DOC)

    assert len(chunks) == 1
    assert chunks[0].text == MARKDOWN_DOC.strip()
    assert chunks[0].structure["headers"] == ("Intro", "Code", "Outro")
    assert chunks[0].structure["section_count"] == 3


class TestLargeSections:
    """Sections that exceed max_tokens on their own."""

    def test_code_block_kept_whole_inside_large_section(self, char_tokenizer: CharacterTokenizer) -> None:
        """Prose is split by sentences; the fence stays one piece."""
        doc = f"## Big\n\n{PROSE}\n\n```\ncode line\n```"
        chunks = StructureAwareSplitter(max_tokens=60, tokenizer=char_tokenizer).split(doc)

        assert [chunk.text for chunk in chunks] == [
            "## Big\n\nAlpha beta gamma delta. Epsilon zeta eta theta.",
            "Iota kappa lambda mu. Nu xi omicron pi.",
            "```\ncode line\n```",
        ]
        assert [chunk.structure["sub_chunk"] for chunk in chunks] == [0, 1, 2]
        assert all(chunk.structure["headers"] == ("Big",) for chunk in chunks)
        assert all(chunk.token_count <= 60 for chunk in chunks)

    def test_list_run_kept_together(self, char_tokenizer: CharacterTokenizer) -> None:
        """A run of list items forms its own block when lists are preserved."""
        items = "- first item\n- second item\n- third item"
        doc = f"## Items\n\n{PROSE}\n\n{items}"
        chunks = StructureAwareSplitter(max_tokens=60, tokenizer=char_tokenizer).split(doc)

        assert any(chunk.text == items for chunk in chunks)


class TestNonMarkdown:
    """Code and plain-text inputs."""

    def test_code_split_at_declarations(self, char_tokenizer: CharacterTokenizer) -> None:
        """Declaration blocks become chunks with indentation intact."""
        chunks = StructureAwareSplitter(max_tokens=30, tokenizer=char_tokenizer).split(CODE)

        assert [chunk.text for chunk in chunks] == [
            "import os",
            "def alpha():\n    return 1",
            "def beta():\n    return 2",
        ]
        assert [chunk.index for chunk in chunks] == [0, 1, 2]

    def test_plain_text_falls_back_to_semantic(self, char_tokenizer: CharacterTokenizer) -> None:
        text = "One two three. Four five six. Seven eight nine. Ten eleven twelve."
        structure = StructureAwareSplitter(max_tokens=35, tokenizer=char_tokenizer).split(text)
        semantic = SemanticSplitter(max_tokens=35, tokenizer=char_tokenizer).split(text)

        assert [chunk.text for chunk in structure] == [chunk.text for chunk in semantic]

    def test_text_that_fits(self, char_tokenizer: CharacterTokenizer) -> None:
        chunks = StructureAwareSplitter(max_tokens=100, tokenizer=char_tokenizer).split("  Plain words.  ")
        assert [chunk.text for chunk in chunks] == ["Plain words."]


def test_markdown_section_render() -> None:
    section = MarkdownSection(header="Title", level=2, lines=["", "Body", ""])
    assert section.render() == "## Title\n\nBody"
    assert MarkdownSection(header="Only", level=1).render() == "# Only"
    assert MarkdownSection(lines=["", "  "]).is_empty
