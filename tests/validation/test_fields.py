"""
Tests for dataclass record introspection.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pytest

from tagrules.core.enums import FieldKind
from tagrules.validation.fields import (
    DataclassFieldSource,
    FieldSource,
    is_exported,
    is_record,
    resolve_kind,
    rule,
    tagged_field_names,
)


@pytest.mark.parametrize(
    "annotation,expected",
    [
        (int, FieldKind.INTEGER),
        (str, FieldKind.STRING),
        (List[int], FieldKind.INTEGER_LIST),
        (List[str], FieldKind.STRING_LIST),
        (list[int], FieldKind.INTEGER_LIST),
        (list[str], FieldKind.STRING_LIST),
        ("int", FieldKind.INTEGER),
        ("List[str]", FieldKind.STRING_LIST),
        ("list[ int ]", FieldKind.INTEGER_LIST),
    ],
)
def test_resolve_supported_kinds(annotation, expected):
    """Test the mapping from type hints to field kinds."""
    assert resolve_kind(annotation) is expected


@pytest.mark.parametrize(
    "annotation",
    [bool, float, bytes, list, List, Optional[int], Tuple[int, ...], Dict[str, int], List[List[int]], "float", None],
)
def test_resolve_unsupported_kinds(annotation):
    """Test that other types resolve to no kind."""
    assert resolve_kind(annotation) is None


def test_is_exported():
    """Test the public name convention."""
    assert is_exported("name")
    assert not is_exported("_secret")
    assert not is_exported("__mangled")


def test_is_record():
    """Test that only dataclass instances are records."""

    @dataclass
    class Point:
        x: int = 0

    assert is_record(Point())
    assert not is_record(Point)
    assert not is_record({"x": 1})
    assert not is_record(None)
    assert not is_record(42)


def test_rule_stores_tag_in_metadata():
    """Test that rule() builds a field carrying the tag."""

    @dataclass
    class Item:
        count: int = rule("range:1,10", default=1)
        tags: List[str] = rule("len:3", metadata={"doc": "codes"}, default_factory=list)

    fields = {f.name: f for f in Item.__dataclass_fields__.values()}
    assert fields["count"].metadata["validate"] == "range:1,10"
    assert fields["count"].default == 1
    assert fields["tags"].metadata == {"doc": "codes", "validate": "len:3"}
    assert Item().tags == []


def test_rule_custom_key():
    """Test storing a tag under a custom metadata key."""

    @dataclass
    class Item:
        count: int = rule("min:1", key="check", default=1)

    assert Item.__dataclass_fields__["count"].metadata == {"check": "min:1"}


def test_field_source_declaration_order(valid_user):
    """Test that fields are reported in declaration order with kinds and tags."""
    source = DataclassFieldSource(valid_user)
    assert isinstance(source, FieldSource)

    specs = list(source.fields())
    assert [s.name for s in specs] == [
        "id", "age", "email", "role", "name", "phones", "scores", "nickname",
    ]
    by_name = {s.name: s for s in specs}
    assert by_name["age"].kind is FieldKind.INTEGER
    assert by_name["age"].tag == "range:18,50"
    assert by_name["age"].value == 30
    assert by_name["phones"].kind is FieldKind.STRING_LIST
    assert by_name["scores"].kind is FieldKind.INTEGER_LIST
    assert by_name["name"].tag is None
    assert not by_name["name"].is_tagged
    assert all(s.is_exported for s in specs)


def test_field_source_private_and_unsupported_fields():
    """Test reporting of private fields and unsupported annotations."""

    @dataclass
    class Record:
        ratio: float = rule("min:1", default=0.5)
        _hidden: int = rule("min:1", default=0)
        flags: Dict[str, int] = field(default_factory=dict)

    specs = {s.name: s for s in DataclassFieldSource(Record()).fields()}
    assert specs["ratio"].kind is None
    assert specs["ratio"].annotation is float
    assert not specs["_hidden"].is_exported
    assert specs["flags"].tag is None


def test_field_source_custom_tag_key():
    """Test reading tags under a configured key."""

    @dataclass
    class Record:
        a: int = rule("min:1", key="check", default=0)
        b: int = rule("min:1", default=0)

    specs = {s.name: s for s in DataclassFieldSource(Record(), tag_key="check").fields()}
    assert specs["a"].tag == "min:1"
    assert specs["b"].tag is None


def test_field_source_rejects_non_records():
    """Test that the adapter only accepts dataclass instances."""

    @dataclass
    class Record:
        a: int = 0

    with pytest.raises(TypeError):
        DataclassFieldSource(Record)
    with pytest.raises(TypeError):
        DataclassFieldSource({"a": 1})


def test_field_source_missing_attribute():
    """Test a field declared with init=False and no default."""

    @dataclass
    class Record:
        a: int = field(init=False, metadata={"validate": "min:1"})

    spec = next(DataclassFieldSource(Record()).fields())
    assert spec.present is False
    assert spec.value is None


def test_tagged_field_names(valid_user):
    """Test listing tagged fields of a dataclass type."""
    assert tagged_field_names(type(valid_user)) == [
        "id", "age", "email", "role", "phones", "scores", "nickname",
    ]
    assert tagged_field_names(valid_user, tag_key="other") == []
