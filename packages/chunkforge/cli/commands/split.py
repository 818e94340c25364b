"""Split a text file into chunks."""

from __future__ import annotations

import json
from pathlib import Path

import click

import chunkforge
from chunkforge.chunking.domain.entities.chunk import Chunk
from chunkforge.chunking.exceptions import ChunkingError

from ._common import STRATEGY_CHOICES, fail, log

OUTPUT_FORMATS = ["text", "json", "jsonl"]


def _write_stdout(chunks: list[Chunk], output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps([chunk.to_dict() for chunk in chunks], indent=2, ensure_ascii=False))
    elif output_format == "jsonl":
        for chunk in chunks:
            click.echo(json.dumps(chunk.to_dict(), ensure_ascii=False))
    else:
        for i, chunk in enumerate(chunks):
            click.echo("=" * 60)
            click.echo(f"Chunk {i + 1} ({chunk.token_count} tokens)")
            click.echo("=" * 60)
            click.echo(chunk.text)
            click.echo()


def _write_directory(chunks: list[Chunk], directory: Path, output_format: str) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    if output_format == "jsonl":
        with (directory / "chunks.jsonl").open("w", encoding="utf-8") as fh:
            for chunk in chunks:
                fh.write(json.dumps(chunk.to_dict(), ensure_ascii=False) + "\n")
        return

    for i, chunk in enumerate(chunks):
        if output_format == "json":
            path = directory / f"chunk_{i:04d}.json"
            path.write_text(json.dumps(chunk.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
        else:
            (directory / f"chunk_{i:04d}.txt").write_text(chunk.text, encoding="utf-8")


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--strategy", "-s", type=click.Choice(STRATEGY_CHOICES), default=None, help="Splitting strategy")
@click.option("--max-tokens", "-m", type=int, default=None, help="Maximum tokens per chunk")
@click.option("--overlap", "-o", type=int, default=None, help="Tokens to overlap between chunks")
@click.option("--tokenizer", "-t", default=None, help="Tokenizer (gpt35_turbo, gpt4, claude, character, ...)")
@click.option("--output", type=click.Path(file_okay=False, path_type=Path), default=None, help="Output directory")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default="text", help="Output format")
@click.pass_context
def split(
    ctx: click.Context,
    file: Path,
    strategy: str | None,
    max_tokens: int | None,
    overlap: int | None,
    tokenizer: str | None,
    output: Path | None,
    output_format: str,
) -> None:
    """Split FILE into chunks."""
    try:
        text = file.read_text(encoding="utf-8")
        log(ctx, f"Splitting {file} with strategy: {strategy or 'default'}")
        chunks = chunkforge.split(
            text,
            strategy=strategy,
            max_tokens=max_tokens,
            overlap_tokens=overlap,
            tokenizer=tokenizer,
        )
        log(ctx, f"Created {len(chunks)} chunks")

        if output is not None:
            _write_directory(chunks, output, output_format)
            log(ctx, f"Wrote {len(chunks)} chunks to {output}")
        else:
            _write_stdout(chunks, output_format)
    except (ChunkingError, OSError, ValueError) as e:
        fail(f"Failed to split file: {e}")
