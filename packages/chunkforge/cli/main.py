"""CLI entry point for chunkforge."""

from __future__ import annotations

import logging

import click

from chunkforge.cli.commands import benchmark, count, split, validate, version
from chunkforge.config import get_settings


@click.group()
@click.version_option(package_name="chunkforge")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """Split text into token-bounded chunks."""
    level = logging.INFO if verbose else getattr(logging, get_settings().LOG_LEVEL)
    logging.basicConfig(level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


cli.add_command(split.split)
cli.add_command(count.count)
cli.add_command(benchmark.benchmark)
cli.add_command(validate.validate)
cli.add_command(version.version)


def main() -> None:
    """Run the chunkforge CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
