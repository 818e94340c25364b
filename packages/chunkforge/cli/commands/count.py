"""Count tokens in a file."""

from __future__ import annotations

from pathlib import Path

import click

import chunkforge
from chunkforge.chunking.exceptions import ChunkingError
from chunkforge.config import get_settings

from ._common import fail


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--tokenizer", "-t", default=None, help="Tokenizer (gpt35_turbo, gpt4, claude, character, ...)")
def count(file: Path, tokenizer: str | None) -> None:
    """Count tokens in FILE."""
    try:
        text = file.read_text(encoding="utf-8")
        token_count = chunkforge.count_tokens(text, tokenizer=tokenizer)
    except (ChunkingError, OSError, ValueError) as e:
        fail(f"Failed to count tokens: {e}")

    click.echo(f"File: {file}")
    click.echo(f"Tokenizer: {tokenizer or get_settings().DEFAULT_TOKENIZER}")
    click.echo(f"Token count: {token_count}")
    click.echo(f"Character count: {len(text)}")
