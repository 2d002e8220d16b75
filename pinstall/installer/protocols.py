"""Interfaces of the collaborators the installer drives.

The solver, graph builder and cache are pluggable. Anything that provides
these methods can be handed to an Installer.
"""

from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from .models import Constraint, InstallOptions, Solution


@runtime_checkable
class RepositoryHandle(Protocol):
    @property
    def path(self) -> Path: ...

    def checkout(self, ref: str) -> None:
        """Make the working tree reflect ``ref``; raise CheckoutError if unknown."""
        ...


@runtime_checkable
class Cache(Protocol):
    def repository(self, identity: str) -> RepositoryHandle: ...

    def clear(self) -> None:
        """Discard every clone and any cached graph metadata."""
        ...

    def save(self) -> None:
        """Persist cache state for future runs."""
        ...


@runtime_checkable
class GraphBuilder(Protocol):
    def graph_from_cache(self, cache: Cache, options: InstallOptions) -> Any: ...


@runtime_checkable
class Solver(Protocol):
    def solve(self, graph: Any, constraints: list[Constraint]) -> Solution:
        """Return a Solution or raise NoSolutionError."""
        ...


__all__ = ["RepositoryHandle", "Cache", "GraphBuilder", "Solver"]
