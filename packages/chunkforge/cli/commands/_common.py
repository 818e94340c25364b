"""Helpers shared by CLI commands."""

from __future__ import annotations

from typing import NoReturn

import click

from chunkforge.chunking.types import ChunkingStrategy

STRATEGY_CHOICES = [s.value for s in ChunkingStrategy] + ["adaptive"]


def fail(message: str) -> NoReturn:
    click.echo(f"ERROR: {message}", err=True)
    raise SystemExit(1)


def log(ctx: click.Context, message: str) -> None:
    if ctx.obj and ctx.obj.get("verbose"):
        click.echo(message, err=True)
