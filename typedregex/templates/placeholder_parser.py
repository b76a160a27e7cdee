"""Placeholder parser and filler for pattern templates.

Only `{{` opens an action, so a stray `}}` is literal text and regex quantifiers
such as `x{2}}` pass through unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Collection

from typedregex.templates.models import ParseResult, Placeholder
from typedregex.utils.errors import TemplateSyntaxError, UnknownFieldReferenceError

_OPEN_DELIM = "{{"
_CLOSE_DELIM = "}}"
_FIELD_PREFIX = "."


def parse_placeholders(template: str) -> ParseResult:
    """Parse field references from a pattern template.

    Rules:
    - Supported placeholder format is exactly: {{.FieldName}}
    - Whitespace is allowed inside the delimiters: {{ .FieldName }}
    - FieldName must be a valid identifier.

    Args:
        template: Template text mixing regex syntax and placeholders.

    Returns:
        ParseResult with unique field names (first-seen order) and every
        placeholder occurrence in template order.

    Raises:
        TemplateSyntaxError: On an unclosed, empty or unsupported action.
    """

    result = ParseResult()
    seen_fields: set[str] = set()
    cursor = 0

    while True:
        start = template.find(_OPEN_DELIM, cursor)
        if start == -1:
            break

        close = template.find(_CLOSE_DELIM, start + len(_OPEN_DELIM))
        if close == -1:
            raise TemplateSyntaxError(
                f"unclosed action at offset {start}: {template[start:]!r}",
                position=start,
            )

        end = close + len(_CLOSE_DELIM)
        field_name = _parse_action(template[start + len(_OPEN_DELIM) : close], start)
        result.placeholders.append(Placeholder(field_name=field_name, start=start, end=end))
        if field_name not in seen_fields:
            result.fields.append(field_name)
            seen_fields.add(field_name)
        cursor = end

    return result


def fill_placeholders(
    template: str,
    known_fields: Collection[str],
    render: Callable[[Placeholder], str],
) -> str:
    """Replace every placeholder with the text returned by `render`.

    All references are checked against `known_fields` before anything is
    rendered, so `render` is only ever called for known fields.

    Raises:
        TemplateSyntaxError: On malformed placeholder syntax.
        UnknownFieldReferenceError: When a placeholder names an unknown field.
    """

    parse_result = parse_placeholders(template)
    unknown = [name for name in parse_result.fields if name not in known_fields]
    if unknown:
        position = next(
            item.start for item in parse_result.placeholders if item.field_name == unknown[0]
        )
        raise UnknownFieldReferenceError(
            f"template references unknown field {unknown[0]!r} at offset {position}",
            field_name=unknown[0],
            position=position,
        )

    chunks: list[str] = []
    cursor = 0
    for placeholder in parse_result.placeholders:
        chunks.append(template[cursor : placeholder.start])
        chunks.append(render(placeholder))
        cursor = placeholder.end
    chunks.append(template[cursor:])
    return "".join(chunks)


def _parse_action(inner: str, start: int) -> str:
    action = inner.strip()
    if not action:
        raise TemplateSyntaxError(f"empty action at offset {start}", position=start)
    if not action.startswith(_FIELD_PREFIX):
        raise TemplateSyntaxError(
            f"unsupported action {action!r} at offset {start}, expected {{{{.FieldName}}}}",
            position=start,
        )

    field_name = action[len(_FIELD_PREFIX) :]
    if not field_name.isidentifier():
        raise TemplateSyntaxError(
            f"invalid field reference {action!r} at offset {start}",
            position=start,
        )
    return field_name
