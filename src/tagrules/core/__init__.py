"""Core types shared by the parser, the evaluator and the orchestrator."""

from .config import DEFAULT_TAG_KEY, ValidatorConfig
from .enums import ConstraintKind, FieldKind, ViolationCode
from .exceptions import (
    ConfigurationError,
    RecordValidationError,
    SchemaDefinitionError,
    TagSyntaxError,
    ValidationError,
)
from .models import ConstraintDescriptor, FieldSpec, ViolationCollection, ViolationRecord

__all__ = [
    "ConfigurationError",
    "ConstraintDescriptor",
    "ConstraintKind",
    "DEFAULT_TAG_KEY",
    "FieldKind",
    "FieldSpec",
    "RecordValidationError",
    "SchemaDefinitionError",
    "TagSyntaxError",
    "ValidationError",
    "ValidatorConfig",
    "ViolationCode",
    "ViolationCollection",
    "ViolationRecord",
]
