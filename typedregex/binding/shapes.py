"""Record shapes describing how schema and output values are read and written.

A shape is built once per compiled pattern from the schema value the caller
passes in. It lists the record's fields in declaration order together with a
getter and a setter for each, so matching never has to inspect the caller's
type again.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from functools import partial
from typing import Any, Literal

from pydantic import BaseModel

from typedregex.utils.errors import SchemaTypeError, ShapeMismatchError

ShapeKind = Literal["mapping", "dataclass", "model"]


@dataclass(frozen=True)
class FieldBinding:
    """Accessor pair for one string field of a record."""

    name: str
    get: Callable[[Any], Any]
    set: Callable[[Any, str], None]


@dataclass(frozen=True)
class RecordShape:
    """Ordered field bindings plus the record type they apply to."""

    kind: ShapeKind
    record_type: type | None
    bindings: tuple[FieldBinding, ...]

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(binding.name for binding in self.bindings)

    @property
    def type_name(self) -> str:
        if self.record_type is None:
            return "mapping"
        return self.record_type.__qualname__

    def read(self, record: Any) -> dict[str, str]:
        """Return field values of `record` in declaration order."""

        return {binding.name: binding.get(record) for binding in self.bindings}

    def check(self, values: Any) -> None:
        """Raise ShapeMismatchError unless `values` can receive match results."""

        if self.kind == "mapping":
            _check_mapping_output(values, self.field_names)
            return

        if type(values) is not self.record_type:
            raise ShapeMismatchError(
                f"values must be {self.type_name}, is {type(values).__qualname__}"
            )

    def write(self, values: Any, resolved: Mapping[str, str]) -> None:
        """Write resolved fields into `values`, leaving the others untouched.

        Fields that have no value at all yet (absent mapping keys) are set to
        the empty string so every field is present after a match.
        """

        for binding in self.bindings:
            value = resolved.get(binding.name)
            if value is not None:
                binding.set(values, value)
            elif binding.get(values) is None:
                binding.set(values, "")


def build_shape(schema: object) -> RecordShape:
    """Build the record shape of a schema value.

    Supported schema values are string-valued mappings, instances of non-frozen
    dataclasses with `str` fields, and instances of non-frozen pydantic models
    with `str` fields.

    Raises:
        SchemaTypeError: When the schema is of any other kind, a field is not a
            string, or the record type is not writable.
    """

    if isinstance(schema, Mapping):
        return _build_mapping_shape(schema)
    if isinstance(schema, BaseModel):
        return _build_model_shape(schema)
    if dataclasses.is_dataclass(schema) and not isinstance(schema, type):
        return _build_dataclass_shape(schema)
    raise SchemaTypeError(
        "schema must be a mapping, a dataclass instance or a pydantic model instance, "
        f"is a {type(schema).__qualname__}"
    )


def _build_mapping_shape(schema: Mapping[Any, Any]) -> RecordShape:
    bindings: list[FieldBinding] = []
    for name, value in schema.items():
        if not isinstance(name, str):
            raise SchemaTypeError(
                f"field names must be strings, {name!r} is a {type(name).__name__}"
            )
        _require_string_value(name, value)
        bindings.append(
            FieldBinding(name=name, get=partial(_get_item, name), set=partial(_set_item, name))
        )
    return RecordShape(kind="mapping", record_type=None, bindings=tuple(bindings))


def _build_dataclass_shape(schema: Any) -> RecordShape:
    record_type = type(schema)
    params = getattr(record_type, "__dataclass_params__", None)
    if params is not None and params.frozen:
        raise SchemaTypeError(f"fields must be writable, {record_type.__qualname__} is frozen")

    bindings: list[FieldBinding] = []
    for item in dataclasses.fields(schema):
        if item.type not in (str, "str"):
            raise SchemaTypeError(
                f"fields must be strings, {item.name} is declared as {_type_label(item.type)}",
                field_name=item.name,
            )
        _require_string_value(item.name, getattr(schema, item.name))
        bindings.append(_attribute_binding(item.name))
    return RecordShape(kind="dataclass", record_type=record_type, bindings=tuple(bindings))


def _build_model_shape(schema: BaseModel) -> RecordShape:
    record_type = type(schema)
    if record_type.model_config.get("frozen"):
        raise SchemaTypeError(f"fields must be writable, {record_type.__qualname__} is frozen")

    bindings: list[FieldBinding] = []
    for name, info in record_type.model_fields.items():
        if info.annotation is not str or info.frozen:
            reason = "read-only" if info.frozen else f"declared as {_type_label(info.annotation)}"
            raise SchemaTypeError(
                f"fields must be writable strings, {name} is {reason}", field_name=name
            )
        _require_string_value(name, getattr(schema, name))
        bindings.append(_attribute_binding(name))
    return RecordShape(kind="model", record_type=record_type, bindings=tuple(bindings))


def _check_mapping_output(values: Any, field_names: tuple[str, ...]) -> None:
    if not isinstance(values, MutableMapping):
        raise ShapeMismatchError(
            f"values must be a mutable mapping, is {type(values).__qualname__}"
        )

    known = set(field_names)
    unknown = [key for key in values if key not in known]
    if unknown:
        raise ShapeMismatchError(
            f"values has keys that are not schema fields: {sorted(map(str, unknown))}"
        )

    for name in field_names:
        current = values.get(name)
        if current is not None and not isinstance(current, str):
            raise ShapeMismatchError(
                f"values[{name!r}] must be a string, is a {type(current).__name__}"
            )


def _require_string_value(name: str, value: object) -> None:
    if not isinstance(value, str):
        raise SchemaTypeError(
            f"fields must be strings, {name} is a {type(value).__name__}",
            field_name=name,
        )


def _attribute_binding(name: str) -> FieldBinding:
    return FieldBinding(name=name, get=partial(_get_attr, name), set=partial(_set_attr, name))


def _get_item(name: str, record: Mapping[str, Any]) -> Any:
    return record.get(name)


def _set_item(name: str, record: MutableMapping[str, Any], value: str) -> None:
    record[name] = value


def _get_attr(name: str, record: object) -> Any:
    return getattr(record, name)


def _set_attr(name: str, record: object, value: str) -> None:
    setattr(record, name, value)


def _type_label(annotation: object) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation)
