"""CLI interface for maraikka-docs.

Command-line tool for serving and inspecting the documentation site.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from maraikka_docs.config import Config
from maraikka_docs.core.paths import split_path, to_url_path

_config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover maraikka-docs.toml)",
)

_source_dir_option = click.option(
    "--source-dir",
    "-s",
    type=click.Path(exists=True, path_type=Path, file_okay=False),
    default=None,
    help="Documentation source directory (overrides config)",
)


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


@click.group()
def cli() -> None:
    """maraikka-docs - Maraikka documentation server."""


@cli.command()
@_config_option
@_source_dir_option
@click.option(
    "--cache-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Cache directory (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
@click.option(
    "--cache/--no-cache",
    default=None,
    help="Enable/disable caching (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    source_dir: Path | None,
    cache_dir: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
    live_reload: bool | None,
    cache: bool | None,
) -> None:
    """Start the documentation server."""
    from maraikka_docs.server import run_server

    _configure_logging(verbose)

    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        source_dir=source_dir,
        cache_dir=cache_dir,
        cache_enabled=cache,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Source directory: {config.docs.source_dir}")
    if config.docs.cache_enabled:
        click.echo(f"Cache directory: {config.docs.cache_dir}")
    else:
        click.echo("Cache: disabled")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config)


@cli.command()
@_config_option
@_source_dir_option
def routes(config_path: Path | None, source_dir: Path | None) -> None:
    """List the URL path of every document."""
    from maraikka_docs.core.store import MarkdownContentStore

    config = _load_config(config_path).with_overrides(source_dir=source_dir)
    store = MarkdownContentStore(config.docs.source_dir)
    for key in store.list_keys():
        click.echo(to_url_path(key))


@cli.command()
@click.argument("path")
@_config_option
@_source_dir_option
def resolve(path: str, config_path: Path | None, source_dir: Path | None) -> None:
    """Print the resolved metadata of a page as JSON.

    Exits with status 1 when the page does not exist.
    """
    from maraikka_docs.server import create_resolver

    config = _load_config(config_path).with_overrides(source_dir=source_dir, cache_enabled=False)
    resolver = create_resolver(config)

    resolution = asyncio.run(resolver.resolve(split_path(path)))
    click.echo(json.dumps(resolution.metadata.to_dict(), indent=2))

    if not resolution.found:
        click.echo(click.style(f"Not found: {to_url_path(resolution.key)}", fg="red"), err=True)
        sys.exit(1)


if __name__ == "__main__":
    cli()
