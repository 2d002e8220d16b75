"""Project manifest reading."""

import logging
from pathlib import Path

from .config import load_jsonish
from .errors import ManifestError, format_field_error
from .paths import normalize_identity

_logging = logging.getLogger(__name__)


class Manifest:
    """Read-once view of a project's manifest file.

    Only the ``dependencies`` object is consumed. A manifest without a
    ``dependencies`` section declares no dependencies.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._dependencies: dict[str, str] | None = None
        self._by_name: dict[str, str] | None = None

    def dependencies(self) -> dict[str, str]:
        """Return the identity -> constraint-spec mapping (memoized)."""
        if self._dependencies is None:
            self._dependencies = self._load()
            _logging.debug(
                f"Loaded {len(self._dependencies)} dependencies from {self.path}"
            )
        return self._dependencies

    def constraint_for(self, package: str) -> str | None:
        """Look up the raw constraint for a package by normalized identity."""
        if self._by_name is None:
            self._by_name = {
                normalize_identity(identity): spec
                for identity, spec in self.dependencies().items()
            }
        return self._by_name.get(normalize_identity(package))

    def _load(self) -> dict[str, str]:
        data = load_jsonish(self.path, label="Manifest", error_cls=ManifestError)

        deps = data.get("dependencies")
        if deps is None:
            return {}
        if not isinstance(deps, dict):
            raise ManifestError(
                format_field_error("Manifest", "dependencies", "must be an object")
            )

        for identity, spec in deps.items():
            if not identity.strip():
                raise ManifestError("Manifest contains an empty package identity")
            if not isinstance(spec, str):
                raise ManifestError(
                    format_field_error(
                        f"Dependency '{identity}'",
                        "constraint",
                        f"must be a string, got {type(spec).__name__}",
                    )
                )
        return dict(deps)


def load_dependencies(path: Path) -> dict[str, str]:
    """Convenience wrapper: read a manifest and return its dependencies."""
    return Manifest(path).dependencies()


__all__ = ["Manifest", "load_dependencies"]
