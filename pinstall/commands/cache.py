"""Package cache commands."""

from pathlib import Path

import click

from pinstall.cache import GitCache
from pinstall.errors import ConfigError

from .utils import fail, resolve_settings


@click.group()
def cache():
    """Package cache management commands."""
    pass


@cache.command(name="clear")
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository cache directory (default: ~/.cache/pinstall)",
)
@click.pass_context
def cache_clear(ctx, cache_dir):
    """Remove every cached repository."""
    try:
        settings = resolve_settings(ctx, cache_dir=cache_dir)
    except ConfigError as e:
        fail(e)
        return

    GitCache(settings.cache_dir).clear()
    click.echo(f"✅ Cleared cache at {settings.cache_dir}")


@cache.command(name="list")
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository cache directory (default: ~/.cache/pinstall)",
)
@click.pass_context
def cache_list(ctx, cache_dir):
    """List cached packages and their known versions."""
    try:
        settings = resolve_settings(ctx, cache_dir=cache_dir)
    except ConfigError as e:
        fail(e)
        return

    metadata = GitCache(settings.cache_dir).metadata()
    if not metadata:
        click.echo("Cache is empty.")
        return
    for name in sorted(metadata):
        versions = ", ".join(metadata[name]) or "(no versions)"
        click.echo(f"{name}: {versions}")
