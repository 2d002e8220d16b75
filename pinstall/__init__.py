"""pinstall: install git-hosted packages at solved, locked versions."""

import logging

from .errors import (
    CacheError,
    CheckoutError,
    ConfigError,
    FileSystemError,
    ManifestError,
    NoSolutionError,
    PinstallError,
    PluginError,
)

__version__ = "0.3.0"

_debug_enabled = False


def set_debug(enabled: bool):
    """Enable or disable debug mode globally."""
    global _debug_enabled
    _debug_enabled = enabled


def is_debug() -> bool:
    """Check if debug mode is enabled."""
    return _debug_enabled


def setup_logging(debug: bool = False) -> None:
    """Configure root logging for CLI runs."""
    set_debug(debug)
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


__all__ = [
    "__version__",
    "PinstallError",
    "ConfigError",
    "ManifestError",
    "PluginError",
    "CacheError",
    "NoSolutionError",
    "CheckoutError",
    "FileSystemError",
    "set_debug",
    "is_debug",
    "setup_logging",
]
