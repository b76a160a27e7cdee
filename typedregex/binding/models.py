"""Data models produced while binding a template to a field schema."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

FieldGroupIndex = Mapping[str, tuple[int, ...]]


@dataclass(frozen=True)
class WrappedSchema:
    """Field sub-patterns and their named capture group forms.

    Example: {"Name": r"\\w+"} is held as
    patterns={"Name": r"\\w+"}, groups={"Name": r"(?P<Name>\\w+)"}.
    """

    field_names: tuple[str, ...]
    patterns: Mapping[str, str]
    groups: Mapping[str, str]


@dataclass(frozen=True)
class AssembledPattern:
    """Composite pattern with every placeholder replaced by a capture group."""

    pattern: str
    regex: re.Pattern[str]
    group_index: FieldGroupIndex
