"""
Tests for declarative record schemas.
"""

import json

import pytest

from tagrules.core.enums import FieldKind
from tagrules.core.exceptions import SchemaDefinitionError, ValidationError
from tagrules.validation.schema import (
    RecordSchema,
    SchemaField,
    SchemaFieldSource,
    SchemaRegistry,
    load_schema,
)


def test_from_dict(user_schema):
    """Test parsing a schema document."""
    assert user_schema.name == "user"
    assert user_schema.description == "User payload"
    assert user_schema.fields == (
        SchemaField(name="age", kind=FieldKind.INTEGER, tag="range:18,50"),
        SchemaField(name="role", kind=FieldKind.STRING, tag="in:admin,stuff"),
        SchemaField(name="phones", kind=FieldKind.STRING_LIST, tag="len:11"),
        SchemaField(name="note", kind=FieldKind.STRING, tag=None),
    )


def test_from_dict_accepts_member_names():
    """Test that kinds may be written as enum member names."""
    schema = RecordSchema.from_dict(
        {"name": "s", "fields": [{"name": "xs", "kind": "integer_list", "validate": "min:0"}]}
    )
    assert schema.fields[0].kind is FieldKind.INTEGER_LIST


def test_to_dict_round_trips(user_schema_document, user_schema):
    """Test converting a schema back to its document form."""
    assert user_schema.to_dict() == user_schema_document
    assert RecordSchema.from_dict(user_schema.to_dict()) == user_schema


@pytest.mark.parametrize(
    "document",
    [
        [],
        {"fields": []},
        {"name": "", "fields": []},
        {"name": "s"},
        {"name": "s", "fields": {}},
        {"name": "s", "fields": [{"kind": "int"}]},
        {"name": "s", "fields": [{"name": "a"}]},
        {"name": "s", "fields": [{"name": "a", "kind": "int", "validate": 5}]},
        {"name": "s", "fields": [{"name": "a", "kind": "int", "extra": True}]},
        {"name": "s", "fields": [], "unknown": 1},
    ],
)
def test_from_dict_rejects_malformed_documents(document):
    """Test that documents are checked against the document schema."""
    with pytest.raises(SchemaDefinitionError, match="Schema validation failed"):
        RecordSchema.from_dict(document)


def test_from_dict_reports_location():
    """Test that the failing location is included in the error."""
    with pytest.raises(SchemaDefinitionError) as exc_info:
        RecordSchema.from_dict({"name": "s", "fields": [{"name": "a", "kind": 1}]})
    assert exc_info.value.path == "fields/0/kind"
    assert isinstance(exc_info.value, ValidationError)


def test_from_dict_unknown_kind():
    """Test that unknown kind names are rejected."""
    with pytest.raises(SchemaDefinitionError, match="unknown field kind 'float'") as exc_info:
        RecordSchema.from_dict({"name": "s", "fields": [{"name": "a", "kind": "float"}]})
    assert exc_info.value.path == "fields/0/kind"


def test_from_dict_duplicate_field():
    """Test that field names must be unique."""
    document = {"name": "s", "fields": [{"name": "a", "kind": "int"}, {"name": "a", "kind": "string"}]}
    with pytest.raises(SchemaDefinitionError, match="duplicate field 'a'"):
        RecordSchema.from_dict(document)


def test_field_source(user_schema):
    """Test introspection of a mapping through a schema."""
    source = user_schema.field_source({"age": 20, "role": "admin", "_private": 1})
    assert isinstance(source, SchemaFieldSource)

    specs = list(source.fields())
    assert [s.name for s in specs] == ["age", "role", "phones", "note"]
    assert specs[0].value == 20 and specs[0].present
    assert specs[2].present is False
    assert specs[3].tag is None


def test_field_source_requires_mapping(user_schema):
    """Test that the schema adapter only accepts mappings."""
    with pytest.raises(TypeError):
        SchemaFieldSource(user_schema, [("age", 20)])


def test_load_schema(tmp_path, user_schema_document, user_schema):
    """Test loading a schema from a JSON file."""
    path = tmp_path / "user.json"
    path.write_text(json.dumps(user_schema_document), encoding="utf-8")
    assert load_schema(str(path)) == user_schema


def test_load_schema_missing_file(tmp_path):
    """Test loading a schema from a missing file."""
    with pytest.raises(FileNotFoundError):
        load_schema(str(tmp_path / "missing.json"))


def test_load_schema_invalid_json(tmp_path):
    """Test loading a schema from a file that is not JSON."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(SchemaDefinitionError, match="Invalid JSON") as exc_info:
        load_schema(str(path))
    assert exc_info.value.path == str(path)


def test_registry(user_schema):
    """Test registering and looking up schemas."""
    registry = SchemaRegistry()
    registry.register(user_schema)

    assert "user" in registry
    assert len(registry) == 1
    assert registry.get("user") is user_schema
    assert registry.names() == ["user"]

    with pytest.raises(SchemaDefinitionError, match="already registered"):
        registry.register(user_schema)

    replacement = RecordSchema(name="user", fields=())
    registry.register(replacement, replace=True)
    assert registry.get("user") is replacement

    assert registry.unregister("user") is True
    assert registry.unregister("user") is False
    with pytest.raises(KeyError):
        registry.get("user")


def test_registry_register_dict(user_schema_document):
    """Test registering a schema straight from its document."""
    registry = SchemaRegistry()
    schema = registry.register_dict(user_schema_document)
    assert registry.get("user") == schema
