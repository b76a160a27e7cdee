"""Validate field sub-patterns and wrap each one in a named capture group."""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from typedregex.binding.models import WrappedSchema
from typedregex.utils.errors import EmptyPatternError, InvalidPatternError, SchemaTypeError

# Repeated template references get group names `<field>__2`, `<field>__3`, ...
_ALIAS_SEPARATOR = "__"
_ALIAS_SUFFIX_RE = re.compile(r"__\d+\Z")
# A leading `(?i)`-style group applies to the whole expression, so inside a
# field it is rewritten to the scoped form `(?i:...)`.
_LEADING_FLAGS_RE = re.compile(r"\(\?([aiLmsux]+)\)")


def synthesize(schema: Mapping[str, str], flags: int = 0) -> WrappedSchema:
    """Wrap every field sub-pattern of `schema` in a capture group named after the field.

    Fields are processed in declaration order. Leading inline flags such as
    `(?i)` are scoped to the field (see `scope_inline_flags`). Each sub-pattern
    is compiled on its own and again in its wrapped form, so an invalid
    fragment is reported against its field rather than as a failure of the
    composite pattern.

    Raises:
        SchemaTypeError: When a field name cannot be a group name or a
            sub-pattern is not a string.
        EmptyPatternError: When a sub-pattern is empty.
        InvalidPatternError: When a sub-pattern does not compile.
    """

    patterns: dict[str, str] = {}
    groups: dict[str, str] = {}

    for name, pattern in schema.items():
        _validate_field_name(name)
        if not isinstance(pattern, str):
            raise SchemaTypeError(
                f"fields must be strings, {name} is a {type(pattern).__name__}",
                field_name=name,
            )
        if pattern == "":
            raise EmptyPatternError(f"field {name} is empty", field_name=name, pattern=pattern)

        scoped = scope_inline_flags(pattern)
        group = wrap_group(name, scoped)
        # The wrapped form must compile too, not just the bare sub-pattern.
        for candidate in (pattern, group):
            try:
                re.compile(candidate, flags)
            except re.error as exc:
                raise InvalidPatternError(
                    f"error parsing regex in field {name}: {exc}",
                    field_name=name,
                    pattern=pattern,
                    cause=exc,
                ) from exc

        patterns[name] = scoped
        groups[name] = group

    return WrappedSchema(
        field_names=tuple(patterns),
        patterns=MappingProxyType(patterns),
        groups=MappingProxyType(groups),
    )


def wrap_group(group_name: str, pattern: str) -> str:
    return f"(?P<{group_name}>{pattern})"


def alias_group_name(field_name: str, occurrence: int) -> str:
    """Group name for the `occurrence`-th (2-based) reference to a field."""

    return f"{field_name}{_ALIAS_SEPARATOR}{occurrence}"


def _validate_field_name(name: object) -> None:
    if not isinstance(name, str) or not name:
        raise SchemaTypeError(f"field names must be non-empty strings, got {name!r}")
    if not name.isidentifier():
        raise SchemaTypeError(f"field name {name!r} is not a valid group name", field_name=name)
    if _ALIAS_SUFFIX_RE.search(name):
        raise SchemaTypeError(
            f"field name {name!r} ends with a reserved suffix ({_ALIAS_SEPARATOR}<digits>)",
            field_name=name,
        )


def scope_inline_flags(pattern: str) -> str:
    """Turn leading global inline flags into a flag group scoped to the pattern.

    `(?i)ab` becomes `(?i:ab)` and `(?i)(?m)^a` becomes `(?im:^a)`. Patterns
    without leading flags are returned unchanged.
    """

    flags = ""
    cursor = 0
    while match := _LEADING_FLAGS_RE.match(pattern, cursor):
        flags += match.group(1)
        cursor = match.end()

    if not flags:
        return pattern
    return f"(?{flags}:{pattern[cursor:]})"
