"""CLI interface for Wikistage."""

import logging
import sys
from pathlib import Path

import click

from wikistage.config import Config
from wikistage.core.store import PageStore
from wikistage.errors import ConfigError, RenderError
from wikistage.server import entry_url, run_server

_env_file_option = click.option(
    "--env-file",
    "-e",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Path to dotenv file (default: auto-discover .env)",
)

_pages_dir_option = click.option(
    "--pages-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding page files (overrides PAGES_DIR)",
)


@click.group()
def cli() -> None:
    """Wikistage - a minimal file-backed wiki."""


@cli.command()
@_env_file_option
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides APPLICATION_HOST)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides APPLICATION_PORT)",
)
@click.option(
    "--prefix",
    default=None,
    help="Mount prefix for all wiki routes (overrides APPLICATION_PREFIX)",
)
@_pages_dir_option
@click.option(
    "--templates-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory holding view.html and edit.html (overrides TEMPLATES_DIR)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
def serve(
    env_file: Path | None,
    host: str | None,
    port: int | None,
    prefix: str | None,
    pages_dir: Path | None,
    templates_dir: Path | None,
    verbose: bool,
) -> None:
    """Start the wiki server."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_config(env_file).with_overrides(
        host=host,
        port=port,
        prefix=prefix,
        pages_dir=pages_dir,
        templates_dir=templates_dir,
    )

    click.echo(f"Pages directory: {config.storage.pages_dir}")
    click.echo(f"Templates directory: {config.storage.templates_dir}")
    click.echo(f"Listening for a connection at {entry_url(config)}")

    try:
        run_server(config)
    except RenderError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(click.style(f"Error: cannot start server: {e}", fg="red"), err=True)
        sys.exit(1)


@cli.command()
@_env_file_option
@_pages_dir_option
def pages(env_file: Path | None, pages_dir: Path | None) -> None:
    """List stored page titles."""
    config = _load_config(env_file).with_overrides(pages_dir=pages_dir)
    store = PageStore(config.storage.pages_dir)
    titles = store.list_titles()
    if not titles:
        click.echo("No pages found")
        return
    for title in titles:
        click.echo(title)


def _load_config(env_file: Path | None) -> Config:
    try:
        return Config.load(env_file)
    except ConfigError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
