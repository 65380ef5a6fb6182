"""
Validation Reporter Components

This module renders ValidationResult instances for people and for transport:
- A text report listing each violation with its field and code
- Dictionary conversion
- JSON serialization
"""

import json
from typing import Any, Dict, List

from ..core.models import ViolationRecord
from .base import ValidationResult

RECORD_LABEL = "<record>"


def _label(violation: ViolationRecord) -> str:
    return violation.field_name or RECORD_LABEL


class ValidationReporter:
    """
    Reporter for formatting and outputting validation results.

    This class provides static methods for converting ValidationResult instances
    into formats suitable for display, logging or transport.
    """

    @staticmethod
    def format_violation(violation: ViolationRecord) -> str:
        """
        Format one violation as ``<field> [<code>]: <message>``.

        Record-level violations, which carry no field name, are labelled
        ``<record>``.
        """
        return f"{_label(violation)} [{violation.code.value}]: {violation.message}"

    @staticmethod
    def format_result(result: ValidationResult) -> str:
        """
        Format a validation result as a human-readable report.

        Args:
            result: ValidationResult instance to format

        Returns:
            str: One header line, then a line per violation in discovery
            order, then any warnings and the call context

        Example:
            >>> print(ValidationReporter.format_result(result))
            Validation failed: 1 violation in 1 field
              - age [constraint_failed]: wrong field age: the number is not in range

            Context:
              record_type: User
        """
        violations = result.violations
        lines: List[str] = []

        if violations:
            fields = {_label(v) for v in violations}
            noun = "violation" if len(violations) == 1 else "violations"
            where = "field" if len(fields) == 1 else "fields"
            lines.append(f"Validation failed: {len(violations)} {noun} in {len(fields)} {where}")
            lines.extend(f"  - {ValidationReporter.format_violation(v)}" for v in violations)
        else:
            checked = result.context.get("checked_fields")
            suffix = "" if checked is None else f": {len(checked)} tagged fields checked"
            lines.append(f"Validation passed{suffix}")

        if result.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  - {warning}" for warning in result.warnings)

        context = {k: v for k, v in result.context.items() if k != "checked_fields"}
        if context:
            lines.append("")
            lines.append("Context:")
            lines.extend(f"  {key}: {value}" for key, value in context.items())

        return "\n".join(lines)

    @staticmethod
    def to_dict(result: ValidationResult) -> Dict[str, Any]:
        """
        Convert a validation result to a dictionary.

        Each violation becomes ``{"field": ..., "message": ..., "code": ...}``.

        Args:
            result: ValidationResult instance to convert

        Returns:
            Dict[str, Any]: Dictionary representation of the validation result
        """
        return {
            "is_valid": result.is_valid,
            "violations": [
                {"field": v.field_name, "message": v.message, "code": v.code.value}
                for v in result.violations
            ],
            "warnings": list(result.warnings),
            "context": dict(result.context),
        }

    @staticmethod
    def to_json(result: ValidationResult) -> str:
        """
        Convert a validation result to JSON.

        Args:
            result: ValidationResult instance to convert

        Returns:
            str: JSON string representation of the validation result
        """
        return json.dumps(ValidationReporter.to_dict(result), indent=2, default=str)
