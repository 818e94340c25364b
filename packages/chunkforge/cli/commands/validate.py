"""Check a directory of chunk files written by ``chunkforge split --output``."""

from __future__ import annotations

import re
from pathlib import Path

import click

from chunkforge.chunking.utils import text_utils

from ._common import fail

_SENTENCE_END = re.compile(r"[.!?]\s*$")


def find_issues(files: list[Path], check_overlap: bool, check_quality: bool) -> list[str]:
    """Return human-readable problems found in the chunk files, in order."""
    issues: list[str] = []
    texts = [path.read_text(encoding="utf-8") for path in files]

    for i, (path, text) in enumerate(zip(files, texts)):
        if not text.strip():
            issues.append(f"{path.name}: Empty chunk")

        if check_overlap and i < len(texts) - 1 and text_utils.find_overlap(text, texts[i + 1]) is None:
            issues.append(f"{path.name}: No overlap with next chunk")

        if check_quality and not _SENTENCE_END.search(text):
            issues.append(f"{path.name}: May end mid-sentence")
    return issues


@click.command()
@click.argument("directory", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--check-overlap/--no-check-overlap", default=True, help="Check overlap between consecutive chunks")
@click.option("--check-quality/--no-check-quality", default=True, help="Check that chunks end on a sentence")
def validate(directory: Path, check_overlap: bool, check_quality: bool) -> None:
    """Validate chunk_*.txt files in DIRECTORY."""
    files = sorted(directory.glob("chunk_*.txt"))
    if not files:
        fail(f"No chunk files found in {directory}")

    click.echo(f"Validating {len(files)} chunks in {directory}")
    try:
        issues = find_issues(files, check_overlap, check_quality)
    except (OSError, ValueError) as e:
        fail(f"Validation failed: {e}")

    if issues:
        click.echo(f"Found {len(issues)} issues:")
        for issue in issues:
            click.echo(f"  - {issue}")
        raise SystemExit(1)

    click.echo("All chunks validated successfully")
