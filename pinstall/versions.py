"""Constraint-spec parsing and version helpers."""

import re

from packaging.specifiers import InvalidSpecifier, SpecifierSet
from packaging.version import InvalidVersion, Version

OVERRIDE_PATTERN = re.compile(r"^(ref|branch):(.*)")

# "1.0.0 <= v < 2.0.0"
RANGE_PATTERN = re.compile(
    r"^\s*(?P<low>[^\s<]+)\s*(?P<low_op><=|<)\s*v\s*(?P<high_op><=|<)\s*(?P<high>\S+)\s*$"
)

_LOW_OPS = {"<=": ">=", "<": ">"}


def parse_override(spec: str | None) -> tuple[str, str] | None:
    """Return (kind, value) for a 'ref:' or 'branch:' spec, else None.

    Examples:
        >>> parse_override("branch:main")
        ('branch', 'main')
        >>> parse_override("1.0.0 <= v < 2.0.0") is None
        True
    """
    if not spec:
        return None
    match = OVERRIDE_PATTERN.match(spec)
    if not match:
        return None
    return match.group(1), match.group(2)


def override_ref(spec: str | None) -> str | None:
    """Return the explicit checkout ref named by a spec, if any."""
    override = parse_override(spec)
    return override[1] if override else None


def parse_range(spec: str) -> SpecifierSet:
    """Parse a version range into a SpecifierSet.

    Accepts the "low <= v < high" form, PEP 440 specifier sets
    (">=1.0,<2.0") and bare versions, which pin exactly.

    Raises:
        ValueError: If the spec is not a recognizable range
    """
    text = spec.strip()
    if not text:
        raise ValueError("empty version range")

    match = RANGE_PATTERN.match(text)
    if match:
        low_op = _LOW_OPS[match.group("low_op")]
        high_op = match.group("high_op")
        low, high = match.group("low"), match.group("high")
        for bound in (low, high):
            _require_version(bound)
        return SpecifierSet(f"{low_op}{low},{high_op}{high}")

    if text[0].isdigit() or text.startswith("v"):
        return SpecifierSet(f"=={_require_version(text)}")

    try:
        return SpecifierSet(text)
    except InvalidSpecifier as e:
        raise ValueError(f"invalid version range '{spec}'") from e


def _require_version(text: str) -> Version:
    try:
        return Version(text)
    except InvalidVersion as e:
        raise ValueError(f"invalid version '{text}'") from e


def parse_version(text: str) -> Version | None:
    """Parse a tag or version string, returning None when it is not one."""
    try:
        return Version(text)
    except InvalidVersion:
        return None


def satisfies(version: str, specifier: SpecifierSet) -> bool:
    parsed = parse_version(version)
    if parsed is None:
        return False
    return specifier.contains(parsed, prereleases=True)


__all__ = [
    "OVERRIDE_PATTERN",
    "parse_override",
    "override_ref",
    "parse_range",
    "parse_version",
    "satisfies",
]
