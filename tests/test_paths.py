"""Tests for path helpers."""

from pathlib import Path

import pytest

from pinstall.errors import FileSystemError
from pinstall.paths import (
    checked_component,
    get_cache_dir,
    get_settings_path,
    lock_file_path,
    normalize_identity,
    package_version_path,
)


@pytest.mark.parametrize(
    "identity",
    [
        "user/pkgA",
        "/user/pkgA/",
        "https://github.com/user/pkgA",
        "https://github.com/user/pkgA.git",
        "ssh://git@github.com/user/pkgA.git",
        "git@github.com:user/pkgA.git",
        "git@github.com:user/pkgA",
    ],
)
def test_normalize_identity(identity):
    assert normalize_identity(identity) == "user/pkgA"


def test_package_version_path():
    name, path = package_version_path(Path("proj"), "https://github.com/user/pkgA", "1.2.0")
    assert name == "user/pkgA"
    assert path == Path("proj/packages/user/pkgA/1.2.0")


def test_lock_file_path():
    assert lock_file_path(Path("proj")) == Path("proj/exact-dependencies.json")


def test_cache_dir_env(monkeypatch, temp_dir):
    monkeypatch.setenv("PINSTALL_CACHE_DIR", str(temp_dir / "c"))
    assert get_cache_dir() == temp_dir / "c"


def test_cache_dir_xdg(monkeypatch, temp_dir):
    monkeypatch.delenv("PINSTALL_CACHE_DIR")
    monkeypatch.setenv("XDG_CACHE_HOME", str(temp_dir))
    assert get_cache_dir() == temp_dir / "pinstall"


def test_cache_dir_home(monkeypatch):
    monkeypatch.delenv("PINSTALL_CACHE_DIR")
    monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
    assert get_cache_dir() == Path.home() / ".cache" / "pinstall"


def test_settings_path(monkeypatch):
    monkeypatch.delenv("PINSTALL_CONFIG")
    assert get_settings_path() == Path.home() / ".config" / "pinstall" / "config.yaml"


@pytest.mark.parametrize(
    "package, version",
    [
        ("../../x", "1.0.0"),
        ("user/../../x", "1.0.0"),
        ("https://example.com/../x", "1.0.0"),
        ("", "1.0.0"),
        ("user/pkgA", ""),
        ("user/pkgA", ".."),
        ("user/pkgA", "."),
        ("user/pkgA", "1.0/../../.."),
        ("user/pkgA", "..\\evil"),
    ],
)
def test_package_version_path_rejects_escaping_components(package, version):
    with pytest.raises(FileSystemError, match="Invalid"):
        package_version_path(Path("proj"), package, version)


def test_checked_component_accepts_nested_identities():
    assert checked_component("group/sub/pkg", "package identity") == "group/sub/pkg"
