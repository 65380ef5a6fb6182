"""
Core data models for the tag validation system.

This module defines the structures that flow between the parser, the
evaluator and the orchestrator:
- ConstraintDescriptor: Parsed, typed form of one validation tag
- ViolationRecord: A single recorded failure tied to one field
- ViolationCollection: Ordered accumulator owned by one validation call
- FieldSpec: One field as seen through a record introspection adapter

The models are implemented using dataclasses; descriptors and records are
frozen and never change after construction.
"""

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple, Union, overload

from .enums import ConstraintKind, FieldKind, ViolationCode


@dataclass(frozen=True)
class ConstraintDescriptor:
    """
    Parsed representation of a validation tag.

    Exactly one rule family is active per descriptor. Fields belonging to other
    families keep their neutral value: an empty membership tuple, no exact
    length, and ``None`` for the bounds it does not use. An unused bound never
    takes part in a comparison.

    Attributes:
        kind (ConstraintKind): Active rule family
        membership_values (Tuple[str, ...]): Allowed entries, verbatim (``in:``)
        exact_length (Optional[int]): Required UTF-8 byte length (``len:``)
        lower_bound (Optional[int]): Inclusive lower bound (``min:``/``range:``)
        upper_bound (Optional[int]): Inclusive upper bound (``max:``/``range:``)
    """

    kind: ConstraintKind
    membership_values: Tuple[str, ...] = ()
    exact_length: Optional[int] = None
    lower_bound: Optional[int] = None
    upper_bound: Optional[int] = None

    def __post_init__(self):
        """Check that only the active family's fields are populated."""
        if not isinstance(self.kind, ConstraintKind):
            raise TypeError("kind must be a ConstraintKind enum")
        if self.kind is ConstraintKind.MEMBERSHIP:
            if not self.membership_values:
                raise ValueError("membership constraint requires at least one value")
        elif self.membership_values:
            raise ValueError(f"{self.kind.value} constraint cannot carry membership values")
        if (self.kind is ConstraintKind.LENGTH) != (self.exact_length is not None):
            raise ValueError("exact_length is set only for length constraints")
        if self.exact_length is not None and self.exact_length < 0:
            raise ValueError("exact_length must be non-negative")
        needs_lower = self.kind in (ConstraintKind.MINIMUM, ConstraintKind.RANGE)
        needs_upper = self.kind in (ConstraintKind.MAXIMUM, ConstraintKind.RANGE)
        if needs_lower != (self.lower_bound is not None):
            raise ValueError(f"lower_bound is set only for min and range constraints, not {self.kind.value}")
        if needs_upper != (self.upper_bound is not None):
            raise ValueError(f"upper_bound is set only for max and range constraints, not {self.kind.value}")

    @property
    def membership_integers(self) -> Tuple[int, ...]:
        """Membership entries parsed as integers, for integer-kinded fields."""
        return tuple(int(value) for value in self.membership_values)


@dataclass(frozen=True)
class ViolationRecord:
    """
    A single recorded rule failure.

    Attributes:
        field_name (str): Field the violation belongs to, empty for record-level
        message (str): Human-readable line describing the failure
        code (ViolationCode): Category of the failure
    """

    field_name: str
    message: str
    code: ViolationCode = ViolationCode.CONSTRAINT_FAILED

    def __str__(self) -> str:
        return self.message


@dataclass
class ViolationCollection:
    """
    Ordered accumulator of violations for one validation call.

    Insertion order is discovery order, across fields and across collection
    elements. Entries are never deduplicated. A collection belongs to exactly
    one call and is handed to the caller as that call's result.

    ``str()`` renders one violation per line, newline-joined, with no trailing
    newline. ``in`` accepts either a ViolationCode sentinel or a
    ViolationRecord.

    Attributes:
        records (List[ViolationRecord]): Violations in discovery order
    """

    records: List[ViolationRecord] = field(default_factory=list)

    def append(self, record: ViolationRecord) -> None:
        """Append a violation at the end of the collection."""
        if not isinstance(record, ViolationRecord):
            raise TypeError("record must be a ViolationRecord")
        self.records.append(record)

    def add(
        self, field_name: str, message: str, code: ViolationCode = ViolationCode.CONSTRAINT_FAILED
    ) -> ViolationRecord:
        """
        Create a violation and append it.

        Args:
            field_name: Field the violation belongs to
            message: Human-readable failure line
            code: Category of the failure

        Returns:
            ViolationRecord: The appended record
        """
        record = ViolationRecord(field_name=field_name, message=message, code=code)
        self.records.append(record)
        return record

    def has(self, code: ViolationCode) -> bool:
        """Whether any recorded violation carries the given code."""
        return any(record.code is code for record in self.records)

    def for_field(self, field_name: str) -> List[ViolationRecord]:
        """Violations recorded against one field, in discovery order."""
        return [record for record in self.records if record.field_name == field_name]

    def messages(self) -> List[str]:
        """Messages of all violations, in discovery order."""
        return [record.message for record in self.records]

    def __contains__(self, item: Any) -> bool:
        if isinstance(item, ViolationCode):
            return self.has(item)
        return item in self.records

    def __iter__(self) -> Iterator[ViolationRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)

    @overload
    def __getitem__(self, index: int) -> ViolationRecord: ...

    @overload
    def __getitem__(self, index: slice) -> List[ViolationRecord]: ...

    def __getitem__(self, index: Union[int, slice]) -> Union[ViolationRecord, List[ViolationRecord]]:
        return self.records[index]

    def __str__(self) -> str:
        return "\n".join(record.message for record in self.records)


@dataclass(frozen=True)
class FieldSpec:
    """
    One record field as reported by an introspection adapter.

    Attributes:
        name (str): Field name
        kind (Optional[FieldKind]): Declared kind, None when unsupported
        tag (Optional[str]): Raw validation tag, None when the field has none
        is_exported (bool): Whether the field is public
        value (Any): Current value of the field on the record
        annotation (Any): Declared type as written, for diagnostics
        present (bool): Whether the record actually holds a value
    """

    name: str
    kind: Optional[FieldKind]
    tag: Optional[str]
    is_exported: bool
    value: Any = None
    annotation: Any = None
    present: bool = True

    @property
    def is_tagged(self) -> bool:
        """Whether the field carries a validation tag."""
        return self.tag is not None
