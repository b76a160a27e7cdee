"""Data models for pattern spec files."""

from __future__ import annotations

import re
from functools import reduce
from operator import or_

from pydantic import BaseModel, ConfigDict, Field, field_validator

from typedregex.matcher import TypedPattern, compile


class PatternSpec(BaseModel):
    """Template, field schema and regex flags loaded from YAML."""

    model_config = ConfigDict(extra="forbid")

    template: str
    fields: dict[str, str] = Field(min_length=1)
    flags: list[str] = Field(default_factory=list)

    @field_validator("flags")
    @classmethod
    def _known_flags(cls, value: list[str]) -> list[str]:
        normalized = [name.upper().strip() for name in value]
        unknown = [name for name in normalized if name not in re.RegexFlag.__members__]
        if unknown:
            raise ValueError(f"unknown regex flags: {', '.join(unknown)}")
        return normalized

    def regex_flags(self) -> int:
        return reduce(or_, (re.RegexFlag[name] for name in self.flags), 0)

    def compile(self) -> TypedPattern:
        """Compile into a pattern that fills string-keyed dicts."""

        return compile(self.template, dict(self.fields), self.regex_flags())
