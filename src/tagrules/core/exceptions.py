"""
Custom exceptions for the tag validation system.

This module defines the hierarchy of exceptions raised by the tag parser, the
schema loader and the strict validation entry point. Malformed record data
never raises: it is reported as violations. These exceptions cover malformed
tags (caught and recorded by the orchestrator), invalid schema documents and
misconfiguration.
"""

from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .models import ViolationCollection


class ValidationError(Exception):
    """
    Base class for validation failures.

    Examples:
        * Malformed validation tags
        * Records that fail their constraints
        * Invalid schema documents
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class TagSyntaxError(ValidationError):
    """
    Raised when a validation tag does not follow the tag grammar.

    The grammar does not distinguish sub-causes for callers: every failure is
    this one exception type. ``reason`` is kept for log output only.

    Examples:
        * Unknown prefix such as ``"between:1,2"``
        * Non-integer argument such as ``"min:abc"``
        * ``len:`` on an integer field
    """

    def __init__(self, tag_text: str, reason: str = "invalid validator syntax"):
        super().__init__(f"{reason}: {tag_text!r}")
        self.tag_text = tag_text
        self.reason = reason


class RecordValidationError(ValidationError):
    """
    Raised by ``validate_or_raise`` when a record has violations.

    The rendering is the violation collection itself: one line per violation,
    newline-joined, without the base class prefix.

    Attributes:
        violations (ViolationCollection): Ordered violations of the call
    """

    def __init__(self, violations: "ViolationCollection"):
        super().__init__(str(violations))
        self.violations = violations

    def __str__(self) -> str:
        return str(self.violations)

    def __contains__(self, item: Any) -> bool:
        return item in self.violations


class SchemaDefinitionError(ValidationError):
    """
    Raised when a declarative record schema document is invalid.

    Examples:
        * Missing ``fields`` list
        * Unknown field kind name
        * Duplicate field names
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message if path is None else f"{path}: {message}")
        self.path = path


class ConfigurationError(Exception):
    """
    Raised when validator configuration is invalid.

    Examples:
        * Empty tag metadata key
        * Configuration object of the wrong type
    """
