"""Exact-version lock file."""

import json
import logging
import os
import tempfile
from pathlib import Path

from pinstall.config import load_jsonish
from pinstall.errors import ConfigError, FileSystemError
from pinstall.paths import normalize_identity

from .models import Solution

_logging = logging.getLogger(__name__)


def exact_dependencies(solution: Solution) -> dict[str, str]:
    """Map each solved package's normalized identity to its version."""
    return {normalize_identity(package): version for package, version in solution.items()}


def render_lock(entries: dict[str, str]) -> str:
    return json.dumps(entries, indent=2, sort_keys=True) + "\n"


def stage_lock_file(path: Path, entries: dict[str, str]) -> Path:
    """Write the lock content to a temporary file next to ``path``.

    The staged file only becomes the lock file through
    ``commit_lock_file``; until then the previous lock (if any) is
    untouched.

    Raises:
        FileSystemError: If the directory or temporary file cannot be written
    """
    content = render_lock(entries)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        if tmp_name:
            discard_staged_lock(Path(tmp_name))
        raise FileSystemError(f"Could not write lock file {path}: {e}") from e

    _logging.debug(f"Staged {len(entries)} lock entries in {tmp_name}")
    return Path(tmp_name)


def commit_lock_file(staged: Path, path: Path) -> None:
    """Move a staged lock file into place in one step."""
    try:
        os.replace(staged, path)
    except OSError as e:
        discard_staged_lock(staged)
        raise FileSystemError(f"Could not write lock file {path}: {e}") from e
    _logging.debug(f"Wrote {path}")


def discard_staged_lock(staged: Path) -> None:
    try:
        staged.unlink()
    except FileNotFoundError:
        pass


def write_lock_file(path: Path, entries: dict[str, str]) -> None:
    """Replace the lock file in one step.

    The content goes to a temporary file in the same directory first, so
    readers only ever see the old file or the complete new one.
    """
    commit_lock_file(stage_lock_file(path, entries), path)


def read_lock_file(path: Path) -> dict[str, str]:
    """Read a lock file written by a previous run.

    Raises:
        ConfigError: If the file is missing or malformed
    """
    data = load_jsonish(path, label="Lock file")
    for name, version in data.items():
        if not isinstance(version, str):
            raise ConfigError(f"Lock file entry '{name}' must be a string")
    return data


__all__ = [
    "exact_dependencies",
    "render_lock",
    "stage_lock_file",
    "commit_lock_file",
    "discard_staged_lock",
    "write_lock_file",
    "read_lock_file",
]
