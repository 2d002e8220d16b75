"""Git-backed package cache.

Each package identity gets one clone under the cache root. The cache also
keeps a small metadata file (``cache.json``) listing the version tags seen
per package, which graph builders can use without opening every clone.
"""

import json
import logging
import shutil
from pathlib import Path

import git

from .errors import CacheError, CheckoutError
from .paths import DEFAULT_HOST, checked_component, get_cache_dir, normalize_identity
from .versions import parse_version

METADATA_FILE = "cache.json"

_logging = logging.getLogger(__name__)


def repository_url(identity: str, base_url: str = DEFAULT_HOST) -> str:
    """Return the clone URL for an identity.

    URLs (and scp-like git addresses) are used as they are; path
    identities are resolved against ``base_url``.
    """
    if "://" in identity or "@" in identity or Path(identity).is_absolute():
        return identity
    return f"{base_url.rstrip('/')}/{identity}"


class GitRepository:
    """A cached clone of one package."""

    def __init__(self, identity: str, repo: git.Repo):
        self.identity = identity
        self._repo = repo
        self._fetched = False

    @property
    def path(self) -> Path:
        return Path(self._repo.working_tree_dir)

    def checkout(self, ref: str) -> None:
        try:
            self._repo.git.checkout(ref, force=True)
        except git.exc.GitCommandError as first_error:
            if self._fetched:
                raise CheckoutError(self.identity, ref, _stderr(first_error)) from first_error
            _logging.debug(f"{ref} not found in {self.identity}, fetching")
            self.fetch()
            try:
                self._repo.git.checkout(ref, force=True)
            except git.exc.GitCommandError as e:
                raise CheckoutError(self.identity, ref, _stderr(e)) from e
        _logging.debug(f"Checked out {self.identity} at {ref}")

    def fetch(self) -> None:
        try:
            for remote in self._repo.remotes:
                remote.fetch(tags=True, prune=True)
        except git.exc.GitCommandError as e:
            raise CacheError(f"Could not fetch {self.identity}: {_stderr(e)}") from e
        self._fetched = True

    def versions(self) -> list[str]:
        """Return tag names that parse as versions, oldest first."""
        tags = [tag.name for tag in self._repo.tags if parse_version(tag.name)]
        return sorted(tags, key=parse_version)


class GitCache:
    """Identity-keyed store of local git clones."""

    def __init__(self, root: Path | None = None, base_url: str = DEFAULT_HOST):
        self.root = Path(root) if root else get_cache_dir()
        self.base_url = base_url
        self._repositories: dict[str, GitRepository] = {}

    @property
    def metadata_path(self) -> Path:
        return self.root / METADATA_FILE

    def repository_path(self, identity: str) -> Path:
        return self.root / checked_component(normalize_identity(identity), "package identity")

    def repository(self, identity: str) -> GitRepository:
        key = normalize_identity(identity)
        if key in self._repositories:
            return self._repositories[key]

        path = self.repository_path(identity)
        try:
            if (path / ".git").exists():
                repo = git.Repo(path)
            else:
                url = repository_url(identity, self.base_url)
                _logging.debug(f"Cloning {url} into {path}")
                path.parent.mkdir(parents=True, exist_ok=True)
                repo = git.Repo.clone_from(url, path)
        except (git.exc.GitCommandError, git.exc.InvalidGitRepositoryError) as e:
            raise CacheError(f"Could not open repository for {identity}: {e}") from e

        handle = GitRepository(key, repo)
        self._repositories[key] = handle
        return handle

    def packages(self) -> list[str]:
        """Identities opened during this run."""
        return sorted(self._repositories)

    def versions(self, identity: str) -> list[str]:
        return self.repository(identity).versions()

    def metadata(self) -> dict[str, list[str]]:
        """Return the version metadata saved by the last successful run."""
        if not self.metadata_path.exists():
            return {}
        try:
            data = json.loads(self.metadata_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            _logging.warning(f"Ignoring unreadable cache metadata: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def clones(self) -> list[Path]:
        """Directories under the root that hold a clone.

        The walk does not descend into a clone once one is found.
        """
        if not self.root.is_dir():
            return []

        found = []
        pending = [self.root]
        while pending:
            directory = pending.pop()
            for child in directory.iterdir():
                if child.is_symlink() or not child.is_dir() or child.name == ".git":
                    continue
                if (child / ".git").exists():
                    found.append(child)
                else:
                    pending.append(child)
        return sorted(found)

    def clear(self) -> None:
        """Remove the clones and metadata file; leave anything else alone."""
        _logging.debug(f"Clearing cache at {self.root}")
        self._repositories.clear()

        for clone in self.clones():
            shutil.rmtree(clone)
            self._prune_empty_parents(clone.parent)
        if self.metadata_path.exists():
            self.metadata_path.unlink()
        self._prune_empty_parents(self.root)

    def _prune_empty_parents(self, directory: Path) -> None:
        # stops at the first non-empty directory, and never climbs above root
        while directory.is_dir() and not any(directory.iterdir()):
            directory.rmdir()
            if directory == self.root:
                break
            directory = directory.parent

    def save(self) -> None:
        data = self.metadata()
        for key, handle in self._repositories.items():
            data[key] = handle.versions()

        self.root.mkdir(parents=True, exist_ok=True)
        self.metadata_path.write_text(
            json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8"
        )
        _logging.debug(f"Saved cache metadata for {len(data)} packages")


def _stderr(error: git.exc.GitCommandError) -> str:
    text = error.stderr if isinstance(error.stderr, str) else str(error)
    return text.strip().strip("'").strip()


__all__ = ["GitCache", "GitRepository", "repository_url"]
