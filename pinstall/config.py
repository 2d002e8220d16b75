"""Settings loading and JSON-ish text parsing."""

import json
import logging
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path

import yaml

from .errors import ConfigError
from .paths import (
    DEFAULT_HOST,
    DEFAULT_INSTALL_DIR,
    DEFAULT_MANIFEST,
    get_cache_dir,
    get_settings_path,
)

_logging = logging.getLogger(__name__)


@dataclass
class Settings:
    """Resolved settings for a single run."""

    manifest_path: Path = field(default_factory=lambda: Path(DEFAULT_MANIFEST))
    install_dir: Path = field(default_factory=lambda: Path(DEFAULT_INSTALL_DIR))
    cache_dir: Path = field(default_factory=get_cache_dir)
    solver: str | None = None
    graph_builder: str | None = None
    base_url: str = DEFAULT_HOST
    verbose: bool = False

    def __post_init__(self):
        for name in ("manifest_path", "install_dir", "cache_dir"):
            value = getattr(self, name)
            if not isinstance(value, Path):
                setattr(self, name, Path(value).expanduser())

    def merged(self, **overrides) -> "Settings":
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def preprocess_jsonish(text: str) -> str:
    """
    Turn JSON-ish text into strict JSON.

    Strips // line comments and trailing commas before ] or }. Removed
    characters are replaced with spaces so line/column positions in
    json.JSONDecodeError still point into the original text.
    """
    out = list(text)
    n = len(text)
    i = 0
    in_string = False

    while i < n:
        char = text[i]
        if in_string:
            if char == "\\":
                i += 2
                continue
            if char == '"':
                in_string = False
            i += 1
            continue

        if char == '"':
            in_string = True
        elif char == "/" and i + 1 < n and text[i + 1] == "/":
            while i < n and text[i] != "\n":
                out[i] = " "
                i += 1
            continue
        elif char == ",":
            j = _skip_blank(text, i + 1)
            if j < n and text[j] in "]}":
                out[i] = " "
        i += 1

    return "".join(out)


def _skip_blank(text: str, start: int) -> int:
    # whitespace and // comments
    j = start
    n = len(text)
    while j < n:
        if text[j] in " \t\r\n":
            j += 1
        elif text.startswith("//", j):
            while j < n and text[j] != "\n":
                j += 1
        else:
            break
    return j


def _format_syntax_error(label: str, original_text: str, error: json.JSONDecodeError) -> str:
    lines = original_text.split("\n")
    parts = [f"{label} syntax error at line {error.lineno}, col {error.colno}: {error.msg}"]
    if 1 <= error.lineno <= len(lines):
        parts.append(lines[error.lineno - 1])
        parts.append(" " * (error.colno - 1) + "^")
    return "\n".join(parts)


def load_jsonish(
    path_or_text: Path | str, label: str = "Config", error_cls: type[ConfigError] = ConfigError
) -> dict:
    """Load a JSON-ish object from a file path or raw text.

    Args:
        path_or_text: A Path to read, or the text itself
        label: Name used in error messages ("Manifest", "Lock file", ...)
        error_cls: ConfigError subclass to raise

    Returns:
        The parsed top-level object

    Raises:
        ConfigError: (or error_cls) if the file cannot be read, has a syntax
            error, or does not contain a JSON object.
    """
    if isinstance(path_or_text, Path):
        try:
            original_text = path_or_text.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise error_cls(f"{label} not found: {path_or_text}")
        except PermissionError:
            raise error_cls(f"Permission denied reading {label.lower()}: {path_or_text}")
        except UnicodeDecodeError:
            raise error_cls(f"{label} is not valid UTF-8: {path_or_text}")
        except OSError as e:
            raise error_cls(f"Error reading {label.lower()} {path_or_text}: {e}")
    elif isinstance(path_or_text, str):
        original_text = path_or_text
    else:
        raise TypeError(f"path_or_text must be Path or str, got {type(path_or_text).__name__}")

    try:
        result = json.loads(preprocess_jsonish(original_text))
    except json.JSONDecodeError as e:
        raise error_cls(_format_syntax_error(label, original_text, e)) from e

    if not isinstance(result, dict):
        raise error_cls(f"{label} must be a JSON object, got {type(result).__name__}")

    return result


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from the YAML settings file.

    A missing file yields default settings. Unknown keys are rejected so
    typos do not pass silently.
    """
    path = path or get_settings_path()
    if not path.exists():
        _logging.debug(f"No settings file at {path}, using defaults")
        return Settings()

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in settings file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading settings file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings must be a mapping, got {type(data).__name__}")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown settings in {path}: {', '.join(unknown)}")

    for key in ("solver", "graph_builder", "base_url"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"Setting '{key}' must be a string, got {type(value).__name__}")

    _logging.debug(f"Loaded settings from {path}")
    return Settings(**data)


def settings_from_env(settings: Settings) -> Settings:
    """Apply PINSTALL_SOLVER / PINSTALL_GRAPH_BUILDER environment overrides."""
    return settings.merged(
        solver=os.environ.get("PINSTALL_SOLVER"),
        graph_builder=os.environ.get("PINSTALL_GRAPH_BUILDER"),
    )


__all__ = [
    "Settings",
    "preprocess_jsonish",
    "load_jsonish",
    "load_settings",
    "settings_from_env",
]
