"""CLI command definitions for pinstall."""

from pathlib import Path

import click

from pinstall import __version__, setup_logging
from pinstall.commands.cache import cache
from pinstall.commands.install import install
from pinstall.commands.lock import lock


@click.group()
@click.version_option(__version__, prog_name="pinstall")
@click.option("--debug", is_flag=True, help="Enable debug output for troubleshooting")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Settings file (default: $PINSTALL_CONFIG or ~/.config/pinstall/config.yaml)",
)
@click.pass_context
def cli(ctx, debug, config_path):
    """Install git-hosted packages at solved, locked versions."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = config_path
    setup_logging(debug)


cli.add_command(install)
cli.add_command(lock)
cli.add_command(cache)

__all__ = ["cli"]


if __name__ == "__main__":
    cli()
