"""
Constraint Evaluator

This module applies a ConstraintDescriptor to an actual field value and
records failures in a caller-owned ViolationCollection. Two scalar entry
points exist, one per value domain:

- evaluate_integer: compares the number itself
- evaluate_string: compares the string length, or the string against the
  membership list

Only the descriptor's active rule family is checked, so a scalar evaluation
appends at most one violation. evaluate_field applies the scalar entry point
once for scalar kinds and once per element, in order and without early exit,
for list kinds.
"""

from typing import Any, Dict, FrozenSet, Optional

from ..core.enums import ConstraintKind, FieldKind
from ..core.models import ConstraintDescriptor, ViolationCollection

INTEGER_MESSAGES: Dict[ConstraintKind, str] = {
    ConstraintKind.MEMBERSHIP: "the number is not in the list",
    ConstraintKind.MINIMUM: "the number is less than the lower bound",
    ConstraintKind.MAXIMUM: "the number is greater than the upper bound",
    ConstraintKind.RANGE: "the number is not in range",
}

STRING_MESSAGES: Dict[ConstraintKind, str] = {
    ConstraintKind.MEMBERSHIP: "the string is not in the list",
    ConstraintKind.LENGTH: "incorrect string len",
    ConstraintKind.MINIMUM: "string len is less than the lower bound",
    ConstraintKind.MAXIMUM: "string len is greater than the upper bound",
    ConstraintKind.RANGE: "string len is not in range",
}


def violation_message(field_name: str, detail: str) -> str:
    """Build the message line for a failed constraint."""
    return f"wrong field {field_name}: {detail}"


def utf8_length(value: str) -> int:
    """Length of a string in UTF-8 bytes."""
    return len(value.encode("utf-8"))


def _below(value: int, descriptor: ConstraintDescriptor) -> bool:
    return descriptor.lower_bound is not None and value < descriptor.lower_bound


def _above(value: int, descriptor: ConstraintDescriptor) -> bool:
    return descriptor.upper_bound is not None and value > descriptor.upper_bound


def _bounds_fail(value: int, descriptor: ConstraintDescriptor) -> bool:
    kind = descriptor.kind
    if kind is ConstraintKind.MINIMUM:
        return _below(value, descriptor)
    if kind is ConstraintKind.MAXIMUM:
        return _above(value, descriptor)
    if kind is ConstraintKind.RANGE:
        return _below(value, descriptor) or _above(value, descriptor)
    return False


def evaluate_integer(
    descriptor: ConstraintDescriptor,
    value: int,
    field_name: str,
    violations: ViolationCollection,
    allowed: Optional[FrozenSet[int]] = None,
) -> bool:
    """
    Evaluate an integer value against a descriptor.

    Args:
        descriptor: Parsed constraint
        value: Integer to check
        field_name: Name used in the violation message
        violations: Accumulator of the current validation call
        allowed: Membership values already parsed as integers, if available

    Returns:
        bool: True if the value satisfies the constraint, False if a violation
        was appended
    """
    if descriptor.kind is ConstraintKind.MEMBERSHIP:
        if allowed is None:
            allowed = frozenset(descriptor.membership_integers)
        failed = value not in allowed
    else:
        # LENGTH never reaches here: the parser rejects it for integer kinds.
        failed = _bounds_fail(value, descriptor)

    if failed:
        violations.add(field_name, violation_message(field_name, INTEGER_MESSAGES[descriptor.kind]))
    return not failed


def evaluate_string(
    descriptor: ConstraintDescriptor,
    value: str,
    field_name: str,
    violations: ViolationCollection,
) -> bool:
    """
    Evaluate a string value against a descriptor.

    Membership is substring containment: the value passes when some allowed
    entry contains it, so ``"ell"`` passes ``in:hello,world``. Length rules
    compare the UTF-8 encoded length in bytes, so ``"ä"`` has length 2.

    Args:
        descriptor: Parsed constraint
        value: String to check
        field_name: Name used in the violation message
        violations: Accumulator of the current validation call

    Returns:
        bool: True if the value satisfies the constraint, False if a violation
        was appended
    """
    kind = descriptor.kind
    if kind is ConstraintKind.MEMBERSHIP:
        failed = not any(value in entry for entry in descriptor.membership_values)
    else:
        length = utf8_length(value)
        if kind is ConstraintKind.LENGTH:
            failed = length != descriptor.exact_length
        else:
            failed = _bounds_fail(length, descriptor)

    if failed:
        violations.add(field_name, violation_message(field_name, STRING_MESSAGES[kind]))
    return not failed


def evaluate_field(
    descriptor: ConstraintDescriptor,
    field_kind: FieldKind,
    value: Any,
    field_name: str,
    violations: ViolationCollection,
) -> int:
    """
    Evaluate a whole field value, scalar or list.

    Args:
        descriptor: Parsed constraint
        field_kind: Declared kind of the field
        value: Field value, already checked against ``field_kind``
        field_name: Name used in violation messages
        violations: Accumulator of the current validation call

    Returns:
        int: Number of violations appended
    """
    items = value if field_kind.is_collection else (value,)

    failures = 0
    if field_kind.is_string:
        for item in items:
            if not evaluate_string(descriptor, item, field_name, violations):
                failures += 1
        return failures

    allowed = None
    if descriptor.kind is ConstraintKind.MEMBERSHIP:
        allowed = frozenset(descriptor.membership_integers)
    for item in items:
        if not evaluate_integer(descriptor, item, field_name, violations, allowed):
            failures += 1
    return failures


def matches_kind(value: Any, field_kind: FieldKind) -> bool:
    """
    Check that a runtime value has the shape its declared kind promises.

    Booleans are not integers here even though ``bool`` subclasses ``int``.
    List kinds accept lists and tuples whose every element matches.

    Args:
        value: Runtime field value
        field_kind: Declared kind

    Returns:
        bool: True if the value can be evaluated as ``field_kind``
    """
    if field_kind is FieldKind.INTEGER:
        return _is_integer(value)
    if field_kind is FieldKind.STRING:
        return isinstance(value, str)
    if not isinstance(value, (list, tuple)):
        return False
    if field_kind is FieldKind.INTEGER_LIST:
        return all(_is_integer(item) for item in value)
    return all(isinstance(item, str) for item in value)


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

