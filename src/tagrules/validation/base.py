"""
Validation Result

This module provides the ValidationResult returned by every validation call.
It wraps the call's own ViolationCollection together with non-fatal warnings
and some context about what was inspected.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..core.exceptions import RecordValidationError
from ..core.models import ViolationCollection


@dataclass
class ValidationResult:
    """
    Outcome of validating one record.

    Attributes:
        violations (ViolationCollection): Violations in discovery order, empty on success
        warnings (List[str]): Non-fatal observations that are not violations
        context (Dict[str, Any]): Details about the call, such as the record type
            and the names of the fields that were checked
    """

    violations: ViolationCollection = field(default_factory=ViolationCollection)
    warnings: List[str] = field(default_factory=list)
    context: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """Whether no violation was recorded."""
        return not self.violations

    @property
    def errors(self) -> List[str]:
        """Violation messages, one per violation."""
        return self.violations.messages()

    def raise_for_violations(self) -> None:
        """
        Raise if the record had violations.

        Raises:
            RecordValidationError: Carrying this result's violations
        """
        if self.violations:
            raise RecordValidationError(self.violations)

    def __bool__(self) -> bool:
        return self.is_valid
