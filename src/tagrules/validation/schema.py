"""
Declarative Record Schemas

This module describes mapping-shaped records (plain dicts, decoded JSON) with
an explicit schema instead of dataclass introspection. A schema document
lists the record's fields in order, each with a kind and an optional tag:

    {
        "name": "user",
        "fields": [
            {"name": "age", "kind": "int", "validate": "range:18,99"},
            {"name": "roles", "kind": "[]string", "validate": "in:admin,user"}
        ]
    }

Documents are checked against a JSON Schema before use. Schemas can be
registered by name in a SchemaRegistry and loaded from JSON files.
"""

import json
import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate as json_validate

from ..core.config import DEFAULT_TAG_KEY
from ..core.enums import FieldKind
from ..core.exceptions import SchemaDefinitionError
from ..core.models import FieldSpec
from .fields import is_exported

logger = logging.getLogger(__name__)

SCHEMA_DOCUMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "description": {"type": "string"},
        "fields": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "minLength": 1},
                    "kind": {"type": "string", "minLength": 1},
                    DEFAULT_TAG_KEY: {"type": "string"},
                },
                "required": ["name", "kind"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["name", "fields"],
    "additionalProperties": False,
}


@dataclass(frozen=True)
class SchemaField:
    """
    One field of a declarative record schema.

    Attributes:
        name (str): Key of the field in the mapping
        kind (FieldKind): Declared kind
        tag (Optional[str]): Validation tag, None for an untagged field
    """

    name: str
    kind: FieldKind
    tag: Optional[str] = None


@dataclass(frozen=True)
class RecordSchema:
    """
    Ordered field declarations for mapping-shaped records.

    Attributes:
        name (str): Schema name, used as the registry key
        fields (Tuple[SchemaField, ...]): Fields in declaration order
        description (Optional[str]): Free-form description
    """

    name: str
    fields: Tuple[SchemaField, ...]
    description: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RecordSchema":
        """
        Build a schema from a schema document.

        Args:
            data: Schema document, see the module docstring

        Returns:
            RecordSchema: Parsed schema

        Raises:
            SchemaDefinitionError: If the document does not match the schema
                document format, names an unknown kind, or repeats a field
        """
        try:
            json_validate(instance=data, schema=SCHEMA_DOCUMENT_SCHEMA)
        except JsonSchemaError as e:
            location = "/".join(str(part) for part in e.absolute_path) or None
            raise SchemaDefinitionError(f"Schema validation failed: {e.message}", location) from e

        fields: List[SchemaField] = []
        seen = set()
        for index, raw in enumerate(data["fields"]):
            name = raw["name"]
            if name in seen:
                raise SchemaDefinitionError(f"duplicate field {name!r}", f"fields/{index}")
            seen.add(name)

            kind = FieldKind.from_name(raw["kind"])
            if kind is None:
                raise SchemaDefinitionError(f"unknown field kind {raw['kind']!r}", f"fields/{index}/kind")
            fields.append(SchemaField(name=name, kind=kind, tag=raw.get(DEFAULT_TAG_KEY)))

        return cls(name=data["name"], fields=tuple(fields), description=data.get("description"))

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to a schema document."""
        document: Dict[str, Any] = {"name": self.name, "fields": []}
        if self.description is not None:
            document["description"] = self.description
        for f in self.fields:
            entry = {"name": f.name, "kind": f.kind.value}
            if f.tag is not None:
                entry[DEFAULT_TAG_KEY] = f.tag
            document["fields"].append(entry)
        return document

    def field_source(self, record: Mapping[str, Any]) -> "SchemaFieldSource":
        """Introspection adapter for a mapping described by this schema."""
        return SchemaFieldSource(self, record)


class SchemaFieldSource:
    """
    Field source backed by a mapping and a RecordSchema.

    Keys of the mapping that the schema does not declare are ignored.
    """

    def __init__(self, schema: RecordSchema, record: Mapping[str, Any]):
        if not isinstance(record, Mapping):
            raise TypeError(f"{type(record).__name__} is not a mapping")
        self.schema = schema
        self.record = record

    def fields(self) -> Iterator[FieldSpec]:
        for f in self.schema.fields:
            yield FieldSpec(
                name=f.name,
                kind=f.kind,
                tag=f.tag,
                is_exported=is_exported(f.name),
                value=self.record.get(f.name),
                annotation=f.kind.value,
                present=f.name in self.record,
            )


def load_schema(file_path: str) -> RecordSchema:
    """
    Load a record schema from a JSON file.

    Args:
        file_path: Path to the JSON schema document

    Returns:
        RecordSchema: Parsed schema

    Raises:
        FileNotFoundError: If the file does not exist
        SchemaDefinitionError: If the file is not valid JSON or not a valid
            schema document
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaDefinitionError(f"Invalid JSON: {e.msg}", file_path) from e

    schema = RecordSchema.from_dict(data)
    logger.debug(f"Loaded schema {schema.name!r} with {len(schema.fields)} fields from {file_path}")
    return schema


class SchemaRegistry:
    """
    Named collection of record schemas.

    Registration and lookup are guarded by a lock so a registry can be shared
    between threads.
    """

    def __init__(self):
        self._schemas: Dict[str, RecordSchema] = {}
        self._lock = threading.Lock()

    def register(self, schema: RecordSchema, replace: bool = False) -> None:
        """
        Register a schema under its name.

        Args:
            schema: Schema to register
            replace: Whether to overwrite an existing schema of the same name

        Raises:
            SchemaDefinitionError: If the name is taken and ``replace`` is False
        """
        with self._lock:
            if schema.name in self._schemas and not replace:
                raise SchemaDefinitionError(f"schema {schema.name!r} is already registered")
            self._schemas[schema.name] = schema
        logger.debug(f"Registered schema {schema.name!r}")

    def register_dict(self, data: Mapping[str, Any], replace: bool = False) -> RecordSchema:
        """Parse a schema document and register it."""
        schema = RecordSchema.from_dict(data)
        self.register(schema, replace=replace)
        return schema

    def get(self, name: str) -> RecordSchema:
        """
        Look up a schema by name.

        Raises:
            KeyError: If no schema of that name is registered
        """
        with self._lock:
            try:
                return self._schemas[name]
            except KeyError:
                raise KeyError(f"No schema registered under {name!r}") from None

    def unregister(self, name: str) -> bool:
        """Remove a schema, returning whether it was registered."""
        with self._lock:
            return self._schemas.pop(name, None) is not None

    def names(self) -> List[str]:
        """Registered schema names, in registration order."""
        with self._lock:
            return list(self._schemas)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._schemas

    def __len__(self) -> int:
        with self._lock:
            return len(self._schemas)
