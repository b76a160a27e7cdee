"""Match regular expressions into records.

A pattern is written as a template whose `{{.Field}}` references are replaced by
capture groups for the sub-patterns held in a schema record. Matching fills a
record of the same shape with the captured values.
"""

from __future__ import annotations

from typedregex.matcher import TypedPattern, compile, describe
from typedregex.utils.errors import (
    EmptyPatternError,
    InvalidPatternError,
    PatternCompileError,
    SchemaError,
    SchemaTypeError,
    ShapeMismatchError,
    TemplateError,
    TemplateSyntaxError,
    TypedRegexError,
    UnknownFieldReferenceError,
)

__version__ = "0.1.0"

__all__ = [
    "TypedPattern",
    "compile",
    "describe",
    "TypedRegexError",
    "SchemaError",
    "EmptyPatternError",
    "InvalidPatternError",
    "SchemaTypeError",
    "TemplateError",
    "TemplateSyntaxError",
    "UnknownFieldReferenceError",
    "PatternCompileError",
    "ShapeMismatchError",
]
