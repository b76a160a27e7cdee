"""Data models for pattern template parsing."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Placeholder:
    """A single `{{.FieldName}}` reference inside a template."""

    field_name: str
    start: int
    end: int


@dataclass
class ParseResult:
    """Placeholder parsing output."""

    fields: list[str] = field(default_factory=list)
    placeholders: list[Placeholder] = field(default_factory=list)
