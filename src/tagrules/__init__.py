"""
tagrules - Declarative Field Validation for Records

This package validates the fields of an in-memory record against constraints
written as short tags on each field:

- ``len:N``       exact string length
- ``in:a,b,c``    membership (integers, or substring containment for strings)
- ``min:N``       lower bound (number, or string length)
- ``max:N``       upper bound (number, or string length)
- ``range:A,B``   inclusive bounds

Records are dataclass instances whose fields carry their tag in field
metadata (see ``rule``), or mappings described by a RecordSchema. A call
returns a ValidationResult holding every violation found, in order.
"""

__version__ = "0.1.0"
__author__ = "tagrules Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 9):
    raise RuntimeError("tagrules requires Python 3.9 or higher")

from .core import (
    ConstraintDescriptor,
    ConstraintKind,
    FieldKind,
    RecordValidationError,
    TagSyntaxError,
    ValidationError,
    ValidatorConfig,
    ViolationCode,
    ViolationCollection,
    ViolationRecord,
)
from .validation import (
    RecordSchema,
    SchemaRegistry,
    TagValidator,
    ValidationReporter,
    ValidationResult,
    load_schema,
    parse_tag,
    rule,
    validate,
    validate_or_raise,
)

__all__ = [
    "ConstraintDescriptor",
    "ConstraintKind",
    "FieldKind",
    "RecordSchema",
    "RecordValidationError",
    "SchemaRegistry",
    "TagSyntaxError",
    "TagValidator",
    "ValidationError",
    "ValidationReporter",
    "ValidationResult",
    "ValidatorConfig",
    "ViolationCode",
    "ViolationCollection",
    "ViolationRecord",
    "load_schema",
    "parse_tag",
    "rule",
    "validate",
    "validate_or_raise",
]
