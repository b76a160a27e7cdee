"""Compiled typed patterns that fill records with the values of their submatches.

    @dataclass
    class Values:
        Name: str = ""
        Age: str = ""

    pattern = compile("Hi, I'm {{.Name}}. I'm {{.Age}} years old!", Values(r"\\w+", r"\\d+"))

    values = Values()
    pattern.find("Hi, I'm Sam. I'm 20 years old!", values)
    # values == Values(Name="Sam", Age="20")
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from typedregex.binding.assembler import assemble
from typedregex.binding.models import AssembledPattern, FieldGroupIndex, WrappedSchema
from typedregex.binding.resolver import resolve, submatches_of
from typedregex.binding.shapes import RecordShape, build_shape
from typedregex.binding.synthesizer import synthesize
from typedregex.utils.errors import ShapeMismatchError, TypedRegexError

logger = logging.getLogger("typedregex")


class TypedPattern:
    """A compiled template whose matches are written into schema-shaped records.

    Instances hold no mutable state and can be shared between threads.
    """

    __slots__ = ("_shape", "_wrapped", "_assembled")

    def __init__(
        self,
        shape: RecordShape,
        wrapped: WrappedSchema,
        assembled: AssembledPattern,
    ) -> None:
        self._shape = shape
        self._wrapped = wrapped
        self._assembled = assembled

    @property
    def pattern(self) -> str:
        """The composite regular expression source."""

        return self._assembled.pattern

    @property
    def regex(self) -> re.Pattern[str]:
        return self._assembled.regex

    @property
    def field_names(self) -> tuple[str, ...]:
        return self._wrapped.field_names

    @property
    def capture_groups(self) -> Mapping[str, str]:
        """Each field's sub-pattern wrapped in its named capture group."""

        return self._wrapped.groups

    @property
    def group_index(self) -> FieldGroupIndex:
        """Group positions of every field, in pattern order."""

        return self._assembled.group_index

    def find(self, text: str, values: Any) -> bool:
        """Fill `values` from the first match of the pattern in `text`.

        `values` must have the shape of the schema passed to `compile`. Returns
        False and leaves `values` untouched when nothing matches. Fields that
        capture nothing in the match keep their current value, so defaults can
        be set on `values` beforehand.

        Raises:
            ShapeMismatchError: When `values` does not have the schema's shape.
        """

        self._shape.check(values)

        match = self._assembled.regex.search(text)
        if match is None:
            return False
        self._assign(match, values)
        return True

    def find_all(self, text: str, values: Sequence[Any | None]) -> int:
        """Fill consecutive entries of `values` from successive matches in `text`.

        At most `len(values)` matches are searched for. A `None` entry skips the
        match at its position. Returns the number of matches found, which can
        be smaller than `len(values)`.

        Raises:
            ShapeMismatchError: When `values` is not a sequence or one of its
                entries does not have the schema's shape.
        """

        if not isinstance(values, Sequence) or isinstance(values, (str, bytes)):
            raise ShapeMismatchError(
                f"values must be a sequence of records, is {type(values).__qualname__}"
            )
        for slot in values:
            if slot is not None:
                self._shape.check(slot)

        found = 0
        for slot, match in zip(values, self._assembled.regex.finditer(text)):
            found += 1
            if slot is None:
                continue
            self._assign(match, slot)
        return found

    def _assign(self, match: re.Match[str], values: Any) -> None:
        resolved = resolve(
            submatches_of(match),
            self._assembled.group_index,
            self._wrapped.field_names,
        )
        self._shape.write(values, resolved)

    def __repr__(self) -> str:
        return f"TypedPattern({self._assembled.pattern!r}, {self._shape.type_name})"


def compile(template: str, schema: object, flags: int = 0) -> TypedPattern:
    """Compile `template` against a schema of field sub-patterns.

    `schema` is a string-valued mapping, dataclass instance or pydantic model
    instance; each field holds the regular expression for that field. Every
    `{{.Field}}` reference in the template becomes a capture group for it.

    Raises:
        SchemaTypeError, EmptyPatternError, InvalidPatternError: For bad schemas.
        TemplateSyntaxError, UnknownFieldReferenceError: For bad templates.
        PatternCompileError: When the assembled pattern does not compile.
    """

    stage = "shape"
    try:
        shape = build_shape(schema)
        stage = "synthesize"
        wrapped = synthesize(shape.read(schema), flags)
        stage = "assemble"
        assembled = assemble(template, wrapped, flags)
    except TypedRegexError as exc:
        _log_event(logging.DEBUG, "compile_failed", stage=stage, error_type=type(exc).__name__)
        raise

    _log_event(
        logging.DEBUG,
        "compiled",
        pattern=assembled.pattern,
        group_count=assembled.regex.groups,
        field_count=len(wrapped.field_names),
    )
    return TypedPattern(shape, wrapped, assembled)


def describe(pattern: TypedPattern) -> dict[str, Any]:
    """JSON-ready summary of a compiled pattern."""

    return {
        "pattern": pattern.pattern,
        "fields": list(pattern.field_names),
        "capture_groups": dict(pattern.capture_groups),
        "group_index": {name: list(found) for name, found in pattern.group_index.items()},
    }


def _log_event(level: int, event: str, **fields: Any) -> None:
    if not logger.isEnabledFor(level):
        return
    logger.log(level, _dump_json({"event": event, **fields}))


def _dump_json(payload: dict[str, Any]) -> str:
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


__all__ = ["TypedPattern", "compile", "describe"]
