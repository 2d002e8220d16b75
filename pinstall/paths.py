"""Path helpers for pinstall: settings, cache and install locations."""

import os
import re
from pathlib import Path
from urllib.parse import urlparse

from .errors import FileSystemError

DEFAULT_HOST = "https://github.com"
DEFAULT_MANIFEST = "pinstall.json"
DEFAULT_INSTALL_DIR = ".pinstall"
LOCK_FILE_NAME = "exact-dependencies.json"
PACKAGES_DIR = "packages"

# git@github.com:user/repo.git
_SCP_LIKE = re.compile(r"^[\w.-]+@[\w.-]+:(?P<path>.+)$")


def get_config_dir() -> Path:
    """Return XDG-compliant config directory: ~/.config/pinstall"""
    return Path.home() / ".config" / "pinstall"


def get_settings_path() -> Path:
    """Return path to the settings file.

    Priority:
    1. PINSTALL_CONFIG environment variable (if set)
    2. ~/.config/pinstall/config.yaml
    """
    if "PINSTALL_CONFIG" in os.environ:
        return Path(os.environ["PINSTALL_CONFIG"])
    return get_config_dir() / "config.yaml"


def get_cache_dir() -> Path:
    """Return the package cache directory.

    PINSTALL_CACHE_DIR wins, then $XDG_CACHE_HOME/pinstall, then
    ~/.cache/pinstall.
    """
    if "PINSTALL_CACHE_DIR" in os.environ:
        return Path(os.environ["PINSTALL_CACHE_DIR"])
    xdg = os.environ.get("XDG_CACHE_HOME")
    base = Path(xdg) if xdg else Path.home() / ".cache"
    return base / "pinstall"


def normalize_identity(identity: str) -> str:
    """Reduce a package identity to its 'user/name' path form.

    Accepts plain path identities as well as https, ssh and scp-like
    git clone URLs.

    Examples:
        >>> normalize_identity("https://github.com/user/pkgA.git")
        'user/pkgA'
        >>> normalize_identity("git@github.com:user/pkgA.git")
        'user/pkgA'
        >>> normalize_identity("user/pkgA")
        'user/pkgA'
    """
    identity = identity.strip()
    match = _SCP_LIKE.match(identity)
    if match and "://" not in identity:
        path = match.group("path")
    elif "://" in identity:
        path = urlparse(identity).path
    else:
        path = identity

    path = path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    return path


def checked_component(value: str, what: str) -> str:
    """Return ``value`` if it is usable as a relative path below a root.

    Every '/'-separated part must be non-empty and must not be '.' or
    '..', so the result can never point at or above the root it is
    joined onto.

    Raises:
        FileSystemError: If any part is empty, '.', '..' or contains a
            backslash
    """
    parts = value.split("/")
    if any(part in ("", ".", "..") or "\\" in part for part in parts):
        raise FileSystemError(f"Invalid {what} for a filesystem path: {value!r}")
    return value


def package_version_path(install_dir: Path, package: str, version: str) -> tuple[str, Path]:
    """Return (package_name, install path) for a resolved package.

    Raises:
        FileSystemError: If the identity or version would escape the
            packages directory
    """
    package_name = checked_component(normalize_identity(package), "package identity")
    if "/" in version:
        raise FileSystemError(f"Invalid version for a filesystem path: {version!r}")
    checked_component(version, "version")
    return package_name, install_dir / PACKAGES_DIR / package_name / version


def lock_file_path(install_dir: Path) -> Path:
    return install_dir / LOCK_FILE_NAME
