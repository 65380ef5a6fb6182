"""
Validation package for tag-annotated records.

This package provides the tag parser, the constraint evaluator, record
introspection adapters and the orchestrator that ties them together.
"""

from .base import ValidationResult
from .evaluator import evaluate_field, evaluate_integer, evaluate_string
from .fields import DataclassFieldSource, FieldSource, resolve_kind, rule, tagged_field_names
from .parser import parse_tag
from .reporter import ValidationReporter
from .schema import RecordSchema, SchemaField, SchemaRegistry, load_schema
from .validator import TagValidator, get_validator, validate, validate_or_raise

__all__ = [
    "DataclassFieldSource",
    "FieldSource",
    "RecordSchema",
    "SchemaField",
    "SchemaRegistry",
    "TagValidator",
    "ValidationReporter",
    "ValidationResult",
    "evaluate_field",
    "evaluate_integer",
    "evaluate_string",
    "get_validator",
    "load_schema",
    "parse_tag",
    "resolve_kind",
    "rule",
    "tagged_field_names",
    "validate",
    "validate_or_raise",
]
