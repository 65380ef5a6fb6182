"""
Enumerations for field kinds, constraint kinds and violation codes.

This module defines the closed vocabularies shared by the tag parser, the
constraint evaluator and the record orchestrator:
- FieldKind: The four field shapes a tag may be attached to
- ConstraintKind: The five rule families a tag may express
- ViolationCode: The category of a recorded violation
"""

from enum import Enum
from typing import Optional


class FieldKind(str, Enum):
    """
    Declared shape of a tagged field.

    Only these four shapes can carry a validation tag. Any other declared
    type is reported as a tag syntax error by the orchestrator.
    """

    INTEGER = "int"
    STRING = "string"
    INTEGER_LIST = "[]int"
    STRING_LIST = "[]string"

    @property
    def is_string(self) -> bool:
        """Whether values of this kind (or its elements) are strings."""
        return self in (FieldKind.STRING, FieldKind.STRING_LIST)

    @property
    def is_collection(self) -> bool:
        """Whether this kind holds a list of scalar elements."""
        return self in (FieldKind.INTEGER_LIST, FieldKind.STRING_LIST)

    @classmethod
    def from_name(cls, name: str) -> Optional["FieldKind"]:
        """
        Resolve a kind from its schema name.

        Accepts the enum values (``int``, ``string``, ``[]int``, ``[]string``)
        as well as the member names in any case (``INTEGER_LIST``).

        Args:
            name: Kind name as written in a schema document

        Returns:
            The matching FieldKind, or None if the name is unknown
        """
        try:
            return cls(name)
        except ValueError:
            pass
        return cls.__members__.get(name.strip().upper())


class ConstraintKind(str, Enum):
    """
    Rule family of a parsed tag.

    Values are the tag prefixes without their trailing colon.
    """

    LENGTH = "len"
    MEMBERSHIP = "in"
    MINIMUM = "min"
    MAXIMUM = "max"
    RANGE = "range"

    @property
    def prefix(self) -> str:
        """Tag prefix introducing this rule family."""
        return f"{self.value}:"


class ViolationCode(str, Enum):
    """
    Category of a recorded violation.

    Codes double as sentinels: callers test for them with ``in`` on a
    ViolationCollection or a RecordValidationError.
    """

    NOT_RECORD = "not_record"  # Top-level value is not record-shaped
    INVALID_TAG_SYNTAX = "invalid_tag_syntax"  # Tag failed the grammar
    UNEXPORTED_FIELD = "unexported_field"  # Tagged field is not public
    TYPE_MISMATCH = "type_mismatch"  # Runtime value does not match its kind
    CONSTRAINT_FAILED = "constraint_failed"  # Value failed its rule
