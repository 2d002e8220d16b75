"""Install command implementation."""

import logging
import sys
from pathlib import Path

import click

from pinstall.cache import GitCache
from pinstall.errors import PinstallError
from pinstall.installer import Installer, InstallOptions
from pinstall.manifest import Manifest
from pinstall.plugins import load_graph_builder, load_solver

from .utils import fail, resolve_settings

_logging = logging.getLogger(__name__)


@click.command()
@click.option(
    "--manifest",
    "-m",
    "manifest_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Manifest file (default: pinstall.json)",
)
@click.option(
    "--install-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory receiving packages and the lock file (default: .pinstall)",
)
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Repository cache directory (default: ~/.cache/pinstall)",
)
@click.option("--solver", default=None, help="Solver as 'module:attribute'")
@click.option("--graph-builder", default=None, help="Graph builder as 'module:attribute'")
@click.option("--verbose", "-v", is_flag=True, help="Show install paths and retry causes")
@click.pass_context
def install(ctx, manifest_path, install_dir, cache_dir, solver, graph_builder, verbose):
    """Solve the manifest's dependencies and install them."""
    try:
        settings = resolve_settings(
            ctx,
            manifest_path=manifest_path,
            install_dir=install_dir,
            cache_dir=cache_dir,
            solver=solver,
            graph_builder=graph_builder,
            verbose=verbose or None,
        )
        _logging.debug(f"Settings: {settings}")

        installer = Installer(
            cache=GitCache(settings.cache_dir, base_url=settings.base_url),
            solver=load_solver(settings.solver),
            graph_builder=load_graph_builder(settings.graph_builder),
            manifest=Manifest(settings.manifest_path),
            install_dir=settings.install_dir,
            options=InstallOptions(verbose=settings.verbose),
        )
        result = installer.install()
    except PinstallError as e:
        fail(e)
        return

    if not result.succeeded:
        sys.exit(1)
