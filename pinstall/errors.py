"""Error types and formatting utilities for consistent error messages.

All errors raised on purpose by pinstall derive from PinstallError so the CLI
can report them uniformly. User-facing messages should go through the
formatting helpers below.

Error Style Guide:
- User-facing errors use 'Error: ' prefix
- Field errors use structured format: '<entity> field '<field>' <issue>'
- Use present tense: 'must be', 'is required'
- Include actionable hints where helpful
"""


class PinstallError(Exception):
    """Base class for all pinstall errors."""


class ConfigError(PinstallError):
    """Raised when settings or JSON-ish text cannot be loaded or parsed.

    Syntax errors carry line numbers, column positions and a caret
    indicator pointing at the offending character.
    """


class ManifestError(ConfigError):
    """Raised when the project manifest is missing or malformed."""


class PluginError(ConfigError):
    """Raised when a solver or graph builder cannot be loaded."""


class CacheError(PinstallError):
    """Raised when a package repository cannot be cloned or read."""


class NoSolutionError(PinstallError):
    """Raised by a solver when the constraints cannot be satisfied.

    The message is the solver's explanation and may span several lines.
    """


class CheckoutError(PinstallError):
    """Raised when a ref cannot be resolved in a cached repository."""

    def __init__(self, package: str, ref: str, reason: str = ""):
        self.package = package
        self.ref = ref
        message = f"Could not check out '{ref}' for {package}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class FileSystemError(PinstallError):
    """Raised when an install directory cannot be created or populated."""


def format_error(message: str) -> str:
    """Format an error message with consistent prefix.

    Args:
        message: The error message to format

    Returns:
        Formatted error message with 'Error: ' prefix

    Examples:
        >>> format_error("manifest not found")
        'Error: manifest not found'

        >>> format_error("package 'user/pkgA' has no version 9.9.9")
        "Error: package 'user/pkgA' has no version 9.9.9"
    """
    return f"Error: {message}"


def format_field_error(entity: str, field: str, issue: str) -> str:
    """Format a field validation error with structured format.

    Args:
        entity: Name of the entity being validated (e.g., "Manifest")
        field: Name of the field that failed validation
        issue: Description of the issue (e.g., "must be an object")

    Returns:
        Formatted field error message

    Examples:
        >>> format_field_error("Manifest", "dependencies", "must be an object")
        "Manifest field 'dependencies' must be an object"

        >>> format_field_error("Settings", "solver", "must be a string")
        "Settings field 'solver' must be a string"
    """
    return f"{entity} field '{field}' {issue}"


def format_suggestion(message: str, suggestion: str) -> str:
    """Format an error message with a helpful suggestion.

    Args:
        message: The error message
        suggestion: Helpful suggestion or hint for the user

    Returns:
        Formatted error with suggestion

    Examples:
        >>> format_suggestion("no lock file", "run 'pinstall install' first")
        "Error: no lock file. Hint: run 'pinstall install' first"

        >>> format_suggestion("no solver configured", "pass --solver module:attr")
        'Error: no solver configured. Hint: pass --solver module:attr'
    """
    return f"{format_error(message)}. Hint: {suggestion}"


def indent(text: str, prefix: str = "  ") -> str:
    """Prefix every line of a (possibly multi-line) message.

    Args:
        text: The message, lines separated by newlines
        prefix: String put in front of each line

    Returns:
        The message with every line prefixed

    Examples:
        >>> indent("a\\nb")
        '  a\\n  b'

        >>> indent("cause", "    ")
        '    cause'
    """
    return "\n".join(f"{prefix}{line}" for line in text.split("\n"))


__all__ = [
    "PinstallError",
    "ConfigError",
    "ManifestError",
    "PluginError",
    "CacheError",
    "NoSolutionError",
    "CheckoutError",
    "FileSystemError",
    "format_error",
    "format_field_error",
    "format_suggestion",
    "indent",
]
