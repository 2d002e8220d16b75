"""Installer engine: constraint registration, solving, population, locking."""

from .installation import MAX_ATTEMPTS, Installer, log_with_dot
from .lockfile import (
    commit_lock_file,
    discard_staged_lock,
    exact_dependencies,
    read_lock_file,
    render_lock,
    stage_lock_file,
    write_lock_file,
)
from .models import (
    AttemptResult,
    AttemptStatus,
    Constraint,
    ConstraintKind,
    InstallOptions,
    InstallResult,
    Solution,
)
from .protocols import Cache, GraphBuilder, RepositoryHandle, Solver
from .resolution import Resolver, parse_constraint

__all__ = [
    "Solution",
    "ConstraintKind",
    "Constraint",
    "AttemptStatus",
    "AttemptResult",
    "InstallOptions",
    "InstallResult",
    "Cache",
    "RepositoryHandle",
    "GraphBuilder",
    "Solver",
    "Resolver",
    "parse_constraint",
    "exact_dependencies",
    "render_lock",
    "stage_lock_file",
    "commit_lock_file",
    "discard_staged_lock",
    "write_lock_file",
    "read_lock_file",
    "Installer",
    "log_with_dot",
    "MAX_ATTEMPTS",
]
