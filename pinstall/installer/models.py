"""Data models for the installation engine."""

from dataclasses import dataclass, field
from enum import Enum

from packaging.specifiers import SpecifierSet

Solution = dict[str, str]


class ConstraintKind(Enum):
    RANGE = "range"
    REF = "ref"
    BRANCH = "branch"


class AttemptStatus(Enum):
    SUCCESS = "success"
    RETRYABLE = "retryable"
    NO_SOLUTION = "no_solution"


@dataclass(frozen=True)
class Constraint:
    """A package identity paired with a version range or explicit ref."""

    package: str
    spec: str
    kind: ConstraintKind
    specifier: SpecifierSet | None = None
    ref: str | None = None

    @property
    def is_override(self) -> bool:
        return self.kind != ConstraintKind.RANGE


@dataclass
class InstallOptions:
    verbose: bool = False


@dataclass
class AttemptResult:
    """Outcome of one solve-and-populate attempt."""

    status: AttemptStatus
    error: Exception | None = None

    @property
    def explanation(self) -> str:
        return str(self.error) if self.error else ""


@dataclass
class InstallResult:
    succeeded: bool
    solution: Solution = field(default_factory=dict)
    explanation: str = ""
    attempts: int = 0
    installed: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


__all__ = [
    "Solution",
    "ConstraintKind",
    "AttemptStatus",
    "Constraint",
    "InstallOptions",
    "AttemptResult",
    "InstallResult",
]
