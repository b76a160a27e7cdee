"""Custom exceptions for pattern compilation and matching.

Every error inherits from TypedRegexError and from the builtin it specialises,
so ``except ValueError`` / ``except TypeError`` handlers keep working.
"""

from __future__ import annotations


class TypedRegexError(Exception):
    """Base exception for all typedregex errors."""


class SchemaError(TypedRegexError, ValueError):
    """Raised when a field sub-pattern in the schema is unusable."""

    def __init__(
        self,
        message: str,
        *,
        field_name: str,
        pattern: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.field_name = field_name
        self.pattern = pattern
        self.cause = cause


class EmptyPatternError(SchemaError):
    """Raised when a field's sub-pattern is the empty string."""


class InvalidPatternError(SchemaError):
    """Raised when a field's sub-pattern does not compile on its own."""


class SchemaTypeError(TypedRegexError, TypeError):
    """Raised when the schema is not a flat, writable, string-valued record."""

    def __init__(self, message: str, *, field_name: str | None = None) -> None:
        super().__init__(message)
        self.field_name = field_name


class TemplateError(TypedRegexError, ValueError):
    """Raised when the pattern template cannot be filled."""

    def __init__(self, message: str, *, position: int | None = None) -> None:
        super().__init__(message)
        self.position = position


class TemplateSyntaxError(TemplateError):
    """Raised for malformed placeholder syntax in the template."""


class UnknownFieldReferenceError(TemplateError):
    """Raised when the template references a field absent from the schema."""

    def __init__(self, message: str, *, field_name: str, position: int | None = None) -> None:
        super().__init__(message, position=position)
        self.field_name = field_name


class PatternCompileError(TypedRegexError, ValueError):
    """Raised when the assembled pattern fails to compile."""

    def __init__(self, message: str, *, pattern: str, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.pattern = pattern
        self.cause = cause


class ShapeMismatchError(TypedRegexError, TypeError):
    """Raised when an output value does not have the schema's shape."""


__all__ = [
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
