"""Translation of manifest entries into solver constraints."""

import logging

from pinstall.errors import ManifestError
from pinstall.versions import parse_override, parse_range

from .models import Constraint, ConstraintKind
from .protocols import Cache

_logging = logging.getLogger(__name__)


def parse_constraint(package: str, spec: str) -> Constraint:
    """Build a Constraint from one manifest entry.

    Raises:
        ManifestError: If the spec is neither an override nor a valid range
    """
    override = parse_override(spec)
    if override:
        kind, ref = override
        if not ref:
            raise ManifestError(f"Dependency '{package}' has an empty {kind} override")
        return Constraint(
            package=package,
            spec=spec,
            kind=ConstraintKind(kind),
            ref=ref,
        )

    try:
        specifier = parse_range(spec)
    except ValueError as e:
        raise ManifestError(f"Dependency '{package}': {e}") from e

    return Constraint(
        package=package,
        spec=spec,
        kind=ConstraintKind.RANGE,
        specifier=specifier,
    )


class Resolver:
    """Registers manifest constraints for the solver.

    Every call to add_constraints starts from an empty constraint set, so
    re-registering after a cache clear never accumulates duplicates.
    """

    def __init__(self, cache: Cache):
        self._cache = cache
        self._constraints: list[Constraint] = []

    def add_constraints(self, dependencies: dict[str, str]) -> list[Constraint]:
        constraints = [
            parse_constraint(package, spec) for package, spec in dependencies.items()
        ]

        # direct dependencies must be present for the graph builder
        for constraint in constraints:
            self._cache.repository(constraint.package)

        self._constraints = constraints
        _logging.debug(f"Registered {len(constraints)} constraints")
        return list(constraints)

    def constraints(self) -> list[Constraint]:
        return list(self._constraints)


__all__ = ["parse_constraint", "Resolver"]
