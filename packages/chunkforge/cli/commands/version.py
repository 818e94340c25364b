"""Show the installed version."""

from __future__ import annotations

import click

from chunkforge.version import get_version


@click.command()
def version() -> None:
    """Show chunkforge version."""
    click.echo(f"chunkforge version {get_version()}")
