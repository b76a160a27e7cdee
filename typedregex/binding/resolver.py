"""Resolve field values from the submatches of a single match."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

Submatches = Sequence[str | None]


def submatches_of(match: re.Match[str]) -> tuple[str | None, ...]:
    """Whole match followed by every group, `None` for groups that did not take part."""

    return (match.group(0), *match.groups())


def resolve(
    submatches: Submatches,
    index: Mapping[str, Sequence[int]],
    field_names: Iterable[str],
) -> dict[str, str]:
    """Resolve each field to its first non-empty submatch.

    Positions are walked in pattern order, so when a field appears in several
    alternation branches the leftmost branch that captured something wins.
    Fields without any non-empty submatch are omitted from the result, which
    leaves them untouched in the caller's output.
    """

    resolved: dict[str, str] = {}
    for name in field_names:
        value = first_non_empty(submatches, index.get(name, ()))
        if value is not None:
            resolved[name] = value
    return resolved


def first_non_empty(submatches: Submatches, positions: Iterable[int]) -> str | None:
    for position in positions:
        # Branches may report fewer groups than the pattern defines.
        if position >= len(submatches):
            continue
        value = submatches[position]
        if value:
            return value
    return None
