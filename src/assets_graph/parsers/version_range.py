"""Normalise NuGet interval-notation version ranges into comparator clauses.

Supported expressions:
- exact match ``[1.2.3]`` -> ``= 1.2.3``
- bounded intervals ``[1.0,2.0)`` -> ``>= 1.0, < 2.0``
- open-ended intervals ``(1.0,)`` -> ``> 1.0`` and ``(,2.0]`` -> ``<= 2.0``
- bare minimum versions ``1.0`` -> ``>= 1.0``

Parsing is best-effort string slicing: malformed input is never rejected, it is
only flagged through ``VersionRange.well_formed``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")
_BRACKETS = "[]()"


@dataclass(frozen=True)
class VersionRange:
    """Typed result of parsing a raw interval range."""

    raw: str
    lower: str | None = None
    lower_inclusive: bool = True
    upper: str | None = None
    upper_inclusive: bool = True
    exact: str | None = None
    well_formed: bool = True

    @property
    def is_empty(self) -> bool:
        return self.exact is None and self.lower is None and self.upper is None

    def clauses(self) -> list[tuple[str, str]]:
        """Return ``(operator, version)`` pairs, lower bound first."""
        if self.exact is not None:
            return [("=", self.exact)]

        clauses: list[tuple[str, str]] = []
        if self.lower is not None:
            clauses.append((">=" if self.lower_inclusive else ">", self.lower))
        if self.upper is not None:
            clauses.append(("<=" if self.upper_inclusive else "<", self.upper))
        return clauses

    def __str__(self) -> str:
        return ", ".join(f"{op} {version}" for op, version in self.clauses())


def _is_well_formed(lower: str, upper: str | None) -> bool:
    if upper is None:
        # single bare version, no interval punctuation at all
        return not any(ch in lower for ch in _BRACKETS)
    return lower[:1] in ("(", "[") and upper[-1:] in (")", "]")


def parse_version_range(raw: str) -> VersionRange:
    """Parse ``raw`` into a ``VersionRange`` without ever raising."""
    value = _WHITESPACE.sub("", raw or "")
    lower, sep, rest = value.partition(",")
    upper = rest if sep else None

    if upper is None and len(lower) > 1 and lower.startswith("[") and lower.endswith("]"):
        return VersionRange(raw=raw, exact=lower[1:-1])

    lower_value: str | None = None
    lower_inclusive = True
    if len(lower) > 1:
        if lower[0] == "(":
            lower_value, lower_inclusive = lower[1:], False
        elif lower[0] == "[":
            lower_value = lower[1:]
        else:
            lower_value = lower

    upper_value: str | None = None
    upper_inclusive = True
    if upper is not None and len(upper) > 1:
        if upper[-1] == ")":
            upper_value, upper_inclusive = upper[:-1], False
        elif upper[-1] == "]":
            upper_value = upper[:-1]
        else:
            upper_value = upper

    return VersionRange(
        raw=raw,
        lower=lower_value,
        lower_inclusive=lower_inclusive,
        upper=upper_value,
        upper_inclusive=upper_inclusive,
        well_formed=_is_well_formed(lower, upper),
    )


def normalize_version_range(raw: str) -> str:
    """Return the canonical comparator form of ``raw`` (may be empty)."""
    return str(parse_version_range(raw))
