from __future__ import annotations

import re

import pytest

from typedregex.binding.synthesizer import (
    alias_group_name,
    scope_inline_flags,
    synthesize,
    wrap_group,
)
from typedregex.utils.errors import EmptyPatternError, InvalidPatternError, SchemaTypeError


def test_synthesize_wraps_each_field_in_named_group() -> None:
    wrapped = synthesize({"Name": r"\w+", "Age": r"\d+"})

    assert wrapped.field_names == ("Name", "Age")
    assert dict(wrapped.groups) == {"Name": r"(?P<Name>\w+)", "Age": r"(?P<Age>\d+)"}
    assert dict(wrapped.patterns) == {"Name": r"\w+", "Age": r"\d+"}


def test_synthesize_keeps_declaration_order() -> None:
    wrapped = synthesize({"Zeta": "z", "Alpha": "a", "Mid": "m"})

    assert wrapped.field_names == ("Zeta", "Alpha", "Mid")


def test_synthesize_empty_pattern_raises() -> None:
    with pytest.raises(EmptyPatternError, match="field Age is empty") as exc_info:
        synthesize({"Name": r"\w+", "Age": ""})

    assert exc_info.value.field_name == "Age"


def test_synthesize_invalid_pattern_names_field() -> None:
    with pytest.raises(InvalidPatternError, match="field Name") as exc_info:
        synthesize({"Name": "(", "Age": r"\d+"})

    assert exc_info.value.field_name == "Name"
    assert exc_info.value.pattern == "("
    assert isinstance(exc_info.value.__cause__, re.error)


def test_synthesize_checks_pattern_with_flags() -> None:
    wrapped = synthesize({"Word": "[a-z]+"}, re.IGNORECASE)

    assert re.fullmatch(wrapped.groups["Word"], "abc")


def test_synthesize_non_string_pattern_raises() -> None:
    with pytest.raises(SchemaTypeError, match="Age is a int"):
        synthesize({"Age": 3})  # type: ignore[dict-item]


@pytest.mark.parametrize("name", ["", "not valid", "1st", "Name__2"])
def test_synthesize_rejects_unusable_field_names(name: str) -> None:
    with pytest.raises(SchemaTypeError):
        synthesize({name: "x"})


def test_synthesize_accepts_double_underscore_without_digits() -> None:
    wrapped = synthesize({"first__name": r"\w+"})

    assert wrapped.field_names == ("first__name",)


def test_synthesize_empty_schema() -> None:
    wrapped = synthesize({})

    assert wrapped.field_names == ()


def test_wrap_and_alias_helpers() -> None:
    assert wrap_group("Name", r"\w+") == r"(?P<Name>\w+)"
    assert alias_group_name("Name", 2) == "Name__2"


def test_synthesize_scopes_leading_inline_flags_to_field() -> None:
    wrapped = synthesize({"Code": "(?i)ab", "Line": "(?m)(?s)^a.b"})

    assert wrapped.groups["Code"] == "(?P<Code>(?i:ab))"
    assert wrapped.patterns["Code"] == "(?i:ab)"
    assert wrapped.groups["Line"] == "(?P<Line>(?ms:^a.b))"


def test_synthesize_leaves_patterns_without_leading_flags_alone() -> None:
    assert scope_inline_flags(r"a(?i:b)") == r"a(?i:b)"
    assert scope_inline_flags(r"\(?i\)") == r"\(?i\)"


def test_synthesize_field_failing_only_when_wrapped_names_field() -> None:
    with pytest.raises(InvalidPatternError, match="field Code") as exc_info:
        synthesize({"Name": r"\w+", "Code": "(?x)ab # trailing comment"})

    assert exc_info.value.field_name == "Code"
    assert exc_info.value.pattern == "(?x)ab # trailing comment"
