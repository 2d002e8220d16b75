"""Lock file display command."""

import sys
from pathlib import Path

import click

from pinstall.errors import ConfigError, format_suggestion
from pinstall.installer import read_lock_file, render_lock
from pinstall.paths import lock_file_path

from .utils import fail, resolve_settings


@click.command()
@click.option(
    "--install-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the lock file (default: .pinstall)",
)
@click.pass_context
def lock(ctx, install_dir):
    """Show the exact versions recorded by the last install."""
    try:
        settings = resolve_settings(ctx, install_dir=install_dir)
        path = lock_file_path(settings.install_dir)
        if not path.exists():
            click.echo(
                format_suggestion(f"no lock file at {path}", "run 'pinstall install' first"),
                err=True,
            )
            sys.exit(1)
        entries = read_lock_file(path)
    except ConfigError as e:
        fail(e)
        return

    click.echo(render_lock(entries), nl=False)
