"""Installation orchestration: solve, check out, materialize, lock."""

import logging
import shutil
from pathlib import Path
from typing import Callable

import click

from pinstall.errors import FileSystemError, NoSolutionError, indent
from pinstall.manifest import Manifest
from pinstall.paths import lock_file_path, package_version_path
from pinstall.versions import override_ref

from .lockfile import (
    commit_lock_file,
    discard_staged_lock,
    exact_dependencies,
    stage_lock_file,
)
from .models import (
    AttemptResult,
    AttemptStatus,
    InstallOptions,
    InstallResult,
    Solution,
)
from .protocols import Cache, GraphBuilder, Solver
from .resolution import Resolver

MAX_ATTEMPTS = 2
VCS_METADATA = (".git", ".hg", ".svn")

_logging = logging.getLogger(__name__)


def log_with_dot(message: str, echo: Callable[[str], None] = click.echo) -> None:
    echo(f"  {click.style('●', fg='green')} {message}")


class Installer:
    """Computes a solution for a manifest and populates the install directory.

    A run makes at most two solve-and-populate attempts. Any failure of the
    first attempt clears the cache and retries once; on the second attempt
    only NoSolutionError is reported, everything else propagates.
    """

    def __init__(
        self,
        cache: Cache,
        solver: Solver,
        graph_builder: GraphBuilder,
        manifest: Manifest,
        install_dir: Path,
        options: InstallOptions | None = None,
        echo: Callable[[str], None] = click.echo,
    ):
        self.cache = cache
        self.solver = solver
        self.graph_builder = graph_builder
        self.manifest = manifest
        self.install_dir = Path(install_dir)
        self.options = options or InstallOptions()
        self._echo = echo

        self._resolver: Resolver | None = None
        self._solution: Solution | None = None
        self._exact_dependencies: dict[str, str] | None = None
        self._installed: list[str] = []
        self._skipped: list[str] = []

    @property
    def resolver(self) -> Resolver:
        if self._resolver is None:
            self._resolver = Resolver(self.cache)
        return self._resolver

    @property
    def lock_file(self) -> Path:
        return lock_file_path(self.install_dir)

    def dependencies(self) -> dict[str, str]:
        return self.manifest.dependencies()

    def solution(self) -> Solution:
        """Solve the registered constraints once per attempt."""
        if self._solution is None:
            graph = self.graph_builder.graph_from_cache(self.cache, self.options)
            self._solution = dict(self.solver.solve(graph, self.resolver.constraints()))
            _logging.debug(f"Solution: {self._solution}")
        return self._solution

    def exact_dependencies(self) -> dict[str, str]:
        if self._exact_dependencies is None:
            self._exact_dependencies = exact_dependencies(self.solution())
        return self._exact_dependencies

    def install(self) -> InstallResult:
        self._echo("Resolving packages...")
        self.resolver.add_constraints(self.dependencies())

        self._echo("Solving dependencies...")
        attempts = 0
        result = AttemptResult(AttemptStatus.RETRYABLE)
        while result.status is AttemptStatus.RETRYABLE and attempts < MAX_ATTEMPTS:
            if attempts:
                self._refresh_cache(result)
            attempts += 1
            result = self._attempt(final=attempts == MAX_ATTEMPTS)

        if result.status is AttemptStatus.NO_SOLUTION:
            self._echo("Could not find a solution:")
            self._echo(indent(result.explanation))
            return InstallResult(
                succeeded=False, explanation=result.explanation, attempts=attempts
            )

        return InstallResult(
            succeeded=True,
            solution=dict(self.solution()),
            attempts=attempts,
            installed=list(self._installed),
            skipped=list(self._skipped),
        )

    def _attempt(self, final: bool) -> AttemptResult:
        try:
            self._populate()
        except NoSolutionError as e:
            status = AttemptStatus.NO_SOLUTION if final else AttemptStatus.RETRYABLE
            return AttemptResult(status, e)
        except Exception as e:
            if final:
                raise
            _logging.debug(f"First attempt failed: {type(e).__name__}: {e}")
            return AttemptResult(AttemptStatus.RETRYABLE, e)
        return AttemptResult(AttemptStatus.SUCCESS)

    def _refresh_cache(self, failed: AttemptResult) -> None:
        self._echo(" ▶ Could not find a solution in local cache, refreshing packages...")
        if self.options.verbose and failed.error is not None:
            self._echo(indent(f"{type(failed.error).__name__}: {failed.explanation}", "    "))

        self.cache.clear()
        self._solution = None
        self._exact_dependencies = None
        self.resolver.add_constraints(self.dependencies())

    def _populate(self) -> None:
        self._installed = []
        self._skipped = []

        for package, version in self.solution().items():
            self._resolve_package(package, version)

        staged = stage_lock_file(self.lock_file, self.exact_dependencies())
        try:
            self._end_successfully(staged)
        finally:
            discard_staged_lock(staged)

    def _end_successfully(self, staged_lock: Path) -> None:
        """Persist the cache, then publish the lock file.

        The lock replaces the previous one only after ``save()`` returns,
        so a failed attempt never leaves a lock file behind.
        """
        self._echo("Saving package cache...")
        self.cache.save()
        commit_lock_file(staged_lock, self.lock_file)

        self._echo("Packages configured successfully!")

    def _resolve_package(self, package: str, version: str) -> None:
        package_name, package_path = package_version_path(
            self.install_dir, package, version
        )

        ref = override_ref(self.manifest.constraint_for(package)) or version
        repository = self.cache.repository(package)
        repository.checkout(ref)

        version_str = ref if ref == version else f"{ref}({version})"
        log_with_dot(
            f"{click.style(package_name, bold=True)} - {click.style(version_str, bold=True)}",
            self._echo,
        )

        if package_path.exists():
            _logging.debug(f"{package_path} exists, skipping copy")
            self._skipped.append(package_name)
            return

        self._copy_package(Path(repository.path), package_path)
        self._installed.append(package_name)

    def _copy_package(self, source: Path, package_path: Path) -> None:
        """Copy a working tree into place without its VCS metadata.

        The tree is assembled in a staging directory next to the target
        and renamed at the end, so an interrupted copy never leaves a
        directory that a later run would take as installed.
        """
        staging = package_path.with_name(f".{package_path.name}.partial")
        try:
            if staging.exists():
                shutil.rmtree(staging)
            package_path.parent.mkdir(parents=True, exist_ok=True)
            shutil.copytree(
                source,
                staging,
                symlinks=True,
                ignore=shutil.ignore_patterns(*VCS_METADATA),
            )
            staging.rename(package_path)
        except OSError as e:
            shutil.rmtree(staging, ignore_errors=True)
            raise FileSystemError(
                f"Could not copy {source} to {package_path}: {e}"
            ) from e

        if self.options.verbose:
            self._echo(f"    → {package_path}")


__all__ = ["Installer", "log_with_dot", "MAX_ATTEMPTS", "VCS_METADATA"]
