"""Command line entry point for trophy-card."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import sys

import click
from rich.console import Console
from rich.logging import RichHandler

from . import __version__
from .config import Settings
from .exceptions import ConfigurationError
from .renderer import write_svg
from .service import TrophyService
from .themes import DEFAULT_THEME, Theme


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.command()
@click.argument("username")
@click.option(
    "--theme",
    default=DEFAULT_THEME.value,
    show_default=True,
    help=f"Card theme ({', '.join(t.value for t in Theme)}). Unknown themes use the default.",
)
@click.option("--columns", default="3", show_default=True, help="Badges per row, 1 to 4.")
@click.option("--token", envvar="GITHUB_TOKEN", default=None, help="GitHub token (or set GITHUB_TOKEN).")
@click.option(
    "--output",
    "-o",
    "output_file",
    default=None,
    type=click.Path(dir_okay=False),
    help="Write the SVG to a file instead of stdout.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(version=__version__, prog_name="trophy-card")
def main(
    username: str,
    theme: str,
    columns: str,
    token: str | None,
    output_file: str | None,
    verbose: bool,
) -> None:
    """Render a GitHub trophy card for USERNAME."""
    _configure_logging(verbose)

    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    if token:
        settings = dataclasses.replace(settings, github_token=token)

    service = TrophyService(settings)
    result = asyncio.run(service.get_card(username, theme=theme, columns=columns))

    if output_file:
        write_svg(result.svg, output_file)
    else:
        click.echo(result.svg, nl=False)

    if result.is_error:
        sys.exit(1)
