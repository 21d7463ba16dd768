"""Command-line interface for inkpress.

This module defines the CLI commands using the Click framework.

Commands:
- build: Build a directory of Markdown files into a static site.
- themes: List the available themes.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import click
import yaml

from . import __version__
from .config import load_config
from .highlighting import available_themes

_LEVEL_STYLES = {
    logging.DEBUG: {"fg": "bright_black"},
    logging.INFO: {"fg": "blue"},
    logging.WARNING: {"fg": "yellow"},
    logging.ERROR: {"fg": "red"},
    logging.CRITICAL: {"fg": "red", "bold": True},
}


class ClickLogHandler(logging.Handler):
    """Logging handler that writes records through click with colours.

    Warnings and errors go to stderr, everything else to stdout.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            style = _LEVEL_STYLES.get(record.levelno, {})
            tag = click.style(f"[{record.levelname}]", **style)
            click.echo(f"{tag} {message}", err=record.levelno >= logging.WARNING)
        except Exception:
            self.handleError(record)


def _configure_logging(verbose: bool) -> None:
    logger = logging.getLogger("inkpress")
    if not any(isinstance(h, ClickLogHandler) for h in logger.handlers):
        logger.addHandler(ClickLogHandler())
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


@click.group()
@click.version_option(version=__version__, prog_name="inkpress")
@click.option("-v", "--verbose", is_flag=True, help="Show debug output")
def cli(verbose: bool):
    """inkpress static site generator."""
    _configure_logging(verbose)


@cli.command()
@click.argument("input_dir", type=click.Path(file_okay=False, path_type=Path))
@click.argument("output_dir", type=click.Path(file_okay=False, path_type=Path))
@click.option("--watch", is_flag=True, help="Rebuild when Markdown files change")
@click.option(
    "--theme",
    default=None,
    help="Syntax highlighting theme (overrides inkpress.yaml, default: default)",
)
def build(input_dir: Path, output_dir: Path, watch: bool, theme: str | None):
    """Build INPUT_DIR of Markdown files into OUTPUT_DIR."""
    from .assets import AssetError
    from .build import BuildError, BuildOptions, build_site

    try:
        config = load_config(Path.cwd())
    except (OSError, yaml.YAMLError) as exc:
        raise click.ClickException(f"Could not read configuration: {exc}") from exc

    options = BuildOptions(
        theme=theme or str(config.get("theme") or "default"),
        watch=watch,
        footer=str(config.get("footer") or ""),
    )
    click.echo(click.style("Starting static site generation...", fg="blue"))
    click.echo(click.style(f"  Input: {input_dir}", fg="bright_black"))
    click.echo(click.style(f"  Output: {output_dir}", fg="bright_black"))
    click.echo(click.style(f"  Theme: {options.theme}", fg="bright_black"))
    if watch:
        click.echo(click.style("  Watch mode enabled", fg="yellow"))

    try:
        result = build_site(input_dir, output_dir, replace(options, watch=False))
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Path: {exc.source_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None
    except AssetError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  Error: {exc}", fg="white"), err=True)
        raise SystemExit(1) from None

    summary = f"Built {result.page_count} pages into {result.output_dir}"
    if result.errors:
        summary += f" ({len(result.errors)} failed)"
    click.echo(click.style(summary, fg="green"))

    # An empty input tree builds nothing, so there is nothing to watch.
    if watch and result.theme is not None:
        from .watch import SiteWatcher

        SiteWatcher(input_dir.resolve(), result.output_dir, options).start()


@cli.command()
def themes():
    """List the available themes."""
    for name in available_themes():
        click.echo(name)


def main():
    """Entry point for the CLI application."""
    cli()
