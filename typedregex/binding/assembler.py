"""Assemble a template and wrapped field groups into one compiled pattern."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from types import MappingProxyType

from typedregex.binding.models import AssembledPattern, FieldGroupIndex, WrappedSchema
from typedregex.binding.synthesizer import alias_group_name, wrap_group
from typedregex.templates.models import Placeholder
from typedregex.templates.placeholder_parser import fill_placeholders
from typedregex.utils.errors import PatternCompileError


def assemble(template: str, wrapped: WrappedSchema, flags: int = 0) -> AssembledPattern:
    """Fill `template` with the wrapped field groups and compile the result.

    The first reference to a field is replaced by its wrapped group verbatim.
    Every further reference gets its own group named `<field>__<n>`, since one
    pattern cannot define the same group name twice.

    Raises:
        TemplateSyntaxError: On malformed placeholder syntax.
        UnknownFieldReferenceError: When a placeholder names an unknown field.
        PatternCompileError: When the composite pattern does not compile.
    """

    occurrences: dict[str, int] = {}
    aliases: dict[str, str] = {}

    def render(placeholder: Placeholder) -> str:
        field_name = placeholder.field_name
        occurrence = occurrences.get(field_name, 0) + 1
        occurrences[field_name] = occurrence
        if occurrence == 1:
            return wrapped.groups[field_name]

        alias = alias_group_name(field_name, occurrence)
        aliases[alias] = field_name
        return wrap_group(alias, wrapped.patterns[field_name])

    pattern = fill_placeholders(template, wrapped.groups, render)

    try:
        regex = re.compile(pattern, flags)
    except re.error as exc:
        raise PatternCompileError(
            f"error parsing `{pattern}`: {exc}", pattern=pattern, cause=exc
        ) from exc

    return AssembledPattern(
        pattern=pattern,
        regex=regex,
        group_index=build_group_index(regex, wrapped.field_names, aliases),
    )


def build_group_index(
    regex: re.Pattern[str],
    field_names: Iterable[str],
    aliases: Mapping[str, str] | None = None,
) -> FieldGroupIndex:
    """Map each field to every group position that captures it, left to right.

    A group belongs to a field when its name is the field name or one of the
    field's aliases. Unnamed and foreign groups are skipped but keep their
    positions, so every index is the engine's own group number.
    """

    aliases = aliases or {}
    positions: dict[str, list[int]] = {name: [] for name in field_names}
    names_by_position = {position: name for name, position in regex.groupindex.items()}

    for position in range(1, regex.groups + 1):
        group_name = names_by_position.get(position)
        if group_name is None:
            continue
        field_name = group_name if group_name in positions else aliases.get(group_name)
        if field_name is None:
            continue
        positions[field_name].append(position)

    return MappingProxyType({name: tuple(found) for name, found in positions.items()})
