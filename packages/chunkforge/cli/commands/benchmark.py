"""Compare splitting strategies on one file."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any

import click

import chunkforge
from chunkforge.chunking.exceptions import ChunkingError

from ._common import STRATEGY_CHOICES, fail

DEFAULT_STRATEGIES = ("character", "semantic", "structure_aware", "adaptive", "recursive")


def run_benchmark(
    text: str,
    strategies: tuple[str, ...],
    max_tokens: int | None,
    tokenizer: str | None,
) -> dict[str, dict[str, Any]]:
    """Split ``text`` once per strategy, collecting timing and chunk statistics."""
    results: dict[str, dict[str, Any]] = {}
    for strategy in strategies:
        start = time.perf_counter()
        try:
            chunks = chunkforge.split(text, strategy=strategy, max_tokens=max_tokens, tokenizer=tokenizer)
        except ChunkingError as e:
            results[strategy] = {"error": str(e)}
            continue
        elapsed = time.perf_counter() - start
        results[strategy] = {
            "time": elapsed,
            "chunks": len(chunks),
            "avg_tokens": sum(c.token_count for c in chunks) / len(chunks) if chunks else 0.0,
        }
    return results


@click.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--strategies",
    multiple=True,
    type=click.Choice(STRATEGY_CHOICES),
    default=DEFAULT_STRATEGIES,
    show_default=True,
    help="Strategy to benchmark (repeatable)",
)
@click.option("--max-tokens", "-m", type=int, default=None, help="Maximum tokens per chunk")
@click.option("--tokenizer", "-t", default=None, help="Tokenizer to use")
def benchmark(file: Path, strategies: tuple[str, ...], max_tokens: int | None, tokenizer: str | None) -> None:
    """Benchmark splitting strategies on FILE."""
    try:
        text = file.read_text(encoding="utf-8")
    except (OSError, ValueError) as e:
        fail(f"Benchmark failed: {e}")

    click.echo(f"Benchmarking strategies on {file}")
    click.echo(f"File size: {len(text)} characters")
    click.echo("-" * 60)

    results = run_benchmark(text, strategies, max_tokens, tokenizer)

    click.echo("RESULTS")
    click.echo("=" * 60)
    for strategy, data in results.items():
        if "error" in data:
            click.echo(f"{strategy}: ERROR - {data['error']}")
            continue
        click.echo(f"{strategy}:")
        click.echo(f"  Time: {data['time']:.3f}s")
        click.echo(f"  Chunks: {data['chunks']}")
        click.echo(f"  Avg tokens/chunk: {data['avg_tokens']:.1f}")
