"""Pytest fixtures and fakes for pinstall tests."""

import json
import tempfile
from pathlib import Path
from typing import Generator

import click
import pytest

from pinstall.errors import CacheError, CheckoutError
from pinstall.paths import normalize_identity


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, temp_dir: Path):
    """Keep tests away from the real settings file and cache."""
    monkeypatch.setenv("PINSTALL_CONFIG", str(temp_dir / "no-such-config.yaml"))
    monkeypatch.setenv("PINSTALL_CACHE_DIR", str(temp_dir / "default-cache"))
    monkeypatch.delenv("PINSTALL_SOLVER", raising=False)
    monkeypatch.delenv("PINSTALL_GRAPH_BUILDER", raising=False)


class FakeRepository:
    """Stand-in for a cached clone: a plain directory plus recorded checkouts."""

    def __init__(self, identity: str, path: Path, refs: set[str] | None = None):
        self.identity = identity
        self._path = path
        self.refs = refs
        self.checkouts: list[str] = []

    @property
    def path(self) -> Path:
        return self._path

    def checkout(self, ref: str) -> None:
        if self.refs is not None and ref not in self.refs:
            raise CheckoutError(self.identity, ref, "unknown revision")
        self.checkouts.append(ref)


class FakeCache:
    def __init__(self, root: Path):
        self.root = root
        self.repos: dict[str, FakeRepository] = {}
        self.events: list[str] = []
        self.clear_count = 0
        self.save_count = 0
        self.failing_saves = 0

    def add_package(
        self,
        identity: str,
        files: dict[str, str] | None = None,
        refs: set[str] | None = None,
    ) -> FakeRepository:
        name = normalize_identity(identity)
        path = self.root / name
        (path / ".git").mkdir(parents=True, exist_ok=True)
        (path / ".git" / "HEAD").write_text("ref: refs/heads/main\n")
        for rel, content in (files or {"README.md": f"# {name}\n"}).items():
            target = path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        repo = FakeRepository(name, path, refs)
        self.repos[name] = repo
        return repo

    def repository(self, identity: str) -> FakeRepository:
        self.events.append(f"repository:{identity}")
        try:
            return self.repos[normalize_identity(identity)]
        except KeyError:
            raise CacheError(f"No repository for {identity}")

    def clear(self) -> None:
        self.events.append("clear")
        self.clear_count += 1

    def save(self) -> None:
        self.events.append("save")
        if self.failing_saves:
            self.failing_saves -= 1
            raise OSError("disk full")
        self.save_count += 1


class FakeSolver:
    """Returns queued outcomes in order; the last one repeats.

    An outcome is either a solution dict or an exception instance to raise.
    """

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls: list[tuple] = []

    def solve(self, graph, constraints):
        self.calls.append((graph, list(constraints)))
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return dict(outcome)


class FakeGraphBuilder:
    def __init__(self):
        self.calls = 0

    def graph_from_cache(self, cache, options):
        self.calls += 1
        return {"graph": self.calls}


@pytest.fixture
def fake_cache(temp_dir: Path) -> FakeCache:
    return FakeCache(temp_dir / "cache")


@pytest.fixture
def write_manifest(temp_dir: Path):
    """Factory writing a manifest with the given dependencies."""

    def _write(dependencies: dict | None, name: str = "pinstall.json") -> Path:
        path = temp_dir / name
        data = {} if dependencies is None else {"dependencies": dependencies}
        path.write_text(json.dumps(data, indent=2))
        return path

    return _write


@pytest.fixture
def progress() -> list[str]:
    """Collected progress lines with styling removed."""
    return []


@pytest.fixture
def echo(progress: list[str]):
    def _echo(message: str = "") -> None:
        progress.append(click.unstyle(message))

    return _echo
