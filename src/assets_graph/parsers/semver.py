"""Minimal NuGet version handling built atop packaging.version.

Supported expressions for ``satisfies``:
- raw interval ranges (e.g., "[1.0,2.0)", "(1.0,)", "[1.2.3]", "1.0")
- normalised comparator clauses (e.g., ">= 1.0, < 2.0", "= 1.2.3")
- an empty range, which matches every version
"""

from __future__ import annotations

import re

from packaging.version import InvalidVersion, Version

from .version_range import parse_version_range

_PATCH = re.compile(r"^(\d+)(.*)$")
_CLAUSE = re.compile(r"^(>=|<=|>|<|=)\s*(.+)$")
_NUGET_VERSION = re.compile(r"^\d+(\.\d+){0,3}(-[0-9A-Za-z.-]+)?(\+[0-9A-Za-z.-]+)?$")


def parse(value: str) -> tuple[int, int, int, str]:
    """Split ``value`` into (major, minor, patch, suffix).

    Missing components default to zero; anything trailing the patch digits
    (e.g. ``-beta.1``) is kept verbatim as the suffix.
    """
    parts = value.split(".", 2)
    major = int(parts[0]) if parts[0].isdigit() else 0
    minor = int(parts[1]) if len(parts) > 1 and parts[1].isdigit() else 0
    match = _PATCH.match(parts[2] if len(parts) > 2 else "0")
    if match is None:
        return major, minor, 0, parts[2]
    return major, minor, int(match.group(1)), match.group(2)


def compare(v1: str, v2: str) -> int:
    """Return negative, zero or positive as ``v1`` sorts before, equal to or after ``v2``."""
    s1 = parse(v1)
    s2 = parse(v2)

    for i in range(3):
        diff = s1[i] - s2[i]
        if diff != 0:
            return diff

    return (s1[3] > s2[3]) - (s1[3] < s2[3])


def _clauses(version_range: str) -> list[tuple[str, str]]:
    expr = version_range.strip()
    if not expr:
        return []

    if expr[0] in "<>=":
        clauses: list[tuple[str, str]] = []
        for token in expr.split(","):
            match = _CLAUSE.match(token.strip())
            if match is None:
                raise InvalidVersion(f"Unrecognised comparator: {token!r}")
            clauses.append((match.group(1), match.group(2).strip()))
        return clauses

    return parse_version_range(expr).clauses()


def _order(installed: str, bound: str) -> int:
    try:
        v, b = Version(installed), Version(bound)
        return (v > b) - (v < b)
    except InvalidVersion:
        pass

    # SemVer2 forms packaging rejects, e.g. "6.0.0-preview.7.21377.19"
    if not (_NUGET_VERSION.match(installed) and _NUGET_VERSION.match(bound)):
        raise InvalidVersion(f"Cannot compare {installed!r} with {bound!r}")
    s1, s2 = parse(installed), parse(bound)
    if s1[:3] == s2[:3] and bool(s1[3]) != bool(s2[3]):
        # a prerelease sorts before its release
        return -1 if s1[3] else 1
    diff = compare(installed, bound)
    return (diff > 0) - (diff < 0)


def satisfies(installed: str, version_range: str) -> bool:
    try:
        ok = True
        for op, bound in _clauses(version_range):
            order = _order(installed, bound)
            if op == ">=":
                ok = ok and order >= 0
            elif op == ">":
                ok = ok and order > 0
            elif op == "<=":
                ok = ok and order <= 0
            elif op == "<":
                ok = ok and order < 0
            else:
                ok = ok and order == 0
        return ok
    except InvalidVersion:
        return False
