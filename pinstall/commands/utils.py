"""Shared helpers for commands."""

import sys

import click

from pinstall.config import Settings, load_settings, settings_from_env
from pinstall.errors import PinstallError, format_error


def resolve_settings(ctx: click.Context, **overrides) -> Settings:
    """Combine settings file, environment and command-line options.

    Command-line options win over the environment, which wins over the
    settings file. Options left as None do not override anything.
    """
    obj = ctx.obj or {}
    settings = load_settings(obj.get("config_path"))
    settings = settings_from_env(settings)
    return settings.merged(**overrides)


def fail(error: PinstallError | str) -> None:
    """Report an error on stderr and exit with status 1."""
    click.echo(format_error(str(error)), err=True)
    sys.exit(1)
