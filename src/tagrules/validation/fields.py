"""
Record Introspection

This module discovers the tagged fields of a record. The orchestrator only
depends on the FieldSource protocol, which yields FieldSpec entries in
declaration order. The native Python record is a dataclass instance:

- the field kind comes from the field's type hint
- the tag comes from the field's metadata under the configured key
- a field is exported unless its name starts with an underscore

Mapping-shaped records described by a declarative schema are handled by
``tagrules.validation.schema``.
"""

import dataclasses
from typing import (
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    get_args,
    get_origin,
    get_type_hints,
    runtime_checkable,
)

from ..core.config import DEFAULT_TAG_KEY
from ..core.enums import FieldKind
from ..core.models import FieldSpec

# Annotations left as strings when type hints cannot be resolved.
_ANNOTATION_NAMES: Dict[str, FieldKind] = {
    "int": FieldKind.INTEGER,
    "str": FieldKind.STRING,
    "List[int]": FieldKind.INTEGER_LIST,
    "list[int]": FieldKind.INTEGER_LIST,
    "typing.List[int]": FieldKind.INTEGER_LIST,
    "List[str]": FieldKind.STRING_LIST,
    "list[str]": FieldKind.STRING_LIST,
    "typing.List[str]": FieldKind.STRING_LIST,
}

_SCALAR_KINDS = {int: FieldKind.INTEGER, str: FieldKind.STRING}
_LIST_KINDS = {int: FieldKind.INTEGER_LIST, str: FieldKind.STRING_LIST}


@runtime_checkable
class FieldSource(Protocol):
    """Protocol for record introspection adapters."""

    def fields(self) -> Iterator[FieldSpec]:
        """Yield the record's fields in declaration order."""
        ...


def resolve_kind(annotation: Any) -> Optional[FieldKind]:
    """
    Map a declared field type to a FieldKind.

    Args:
        annotation: Type hint of the field, or its string form

    Returns:
        The matching FieldKind, or None if the type is not supported

    Example:
        >>> resolve_kind(List[int])
        <FieldKind.INTEGER_LIST: '[]int'>
        >>> resolve_kind(float) is None
        True
    """
    if isinstance(annotation, str):
        return _ANNOTATION_NAMES.get(annotation.replace(" ", ""))

    if isinstance(annotation, type) and annotation in _SCALAR_KINDS:
        return _SCALAR_KINDS[annotation]

    if get_origin(annotation) is list:
        args = get_args(annotation)
        if len(args) == 1 and args[0] in _LIST_KINDS:
            return _LIST_KINDS[args[0]]
    return None


def is_exported(name: str) -> bool:
    """Whether a field name is public."""
    return not name.startswith("_")


def is_record(value: Any) -> bool:
    """Whether a value is a dataclass instance (a dataclass type is not)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


class DataclassFieldSource:
    """
    Field source backed by a dataclass instance.

    Attributes:
        record: Dataclass instance being inspected
        tag_key: Metadata key holding validation tags
    """

    def __init__(self, record: Any, tag_key: str = DEFAULT_TAG_KEY):
        if not is_record(record):
            raise TypeError(f"{type(record).__name__} is not a dataclass instance")
        self.record = record
        self.tag_key = tag_key

    def _type_hints(self) -> Dict[str, Any]:
        try:
            return get_type_hints(type(self.record))
        except (NameError, TypeError):
            # Unresolvable forward references; fall back to raw annotations.
            return {}

    def fields(self) -> Iterator[FieldSpec]:
        hints = self._type_hints()
        for f in dataclasses.fields(self.record):
            annotation = hints.get(f.name, f.type)
            tag = f.metadata.get(self.tag_key) if f.metadata else None
            present = hasattr(self.record, f.name)
            yield FieldSpec(
                name=f.name,
                kind=resolve_kind(annotation),
                tag=tag,
                is_exported=is_exported(f.name),
                value=getattr(self.record, f.name, None),
                annotation=annotation,
                present=present,
            )


def rule(
    tag: str,
    *,
    key: str = DEFAULT_TAG_KEY,
    metadata: Optional[Mapping[str, Any]] = None,
    **field_kwargs: Any,
) -> Any:
    """
    Declare a dataclass field carrying a validation tag.

    Args:
        tag: Validation tag, for example ``"range:1,10"``
        key: Metadata key to store the tag under
        metadata: Extra field metadata to keep alongside the tag
        **field_kwargs: Passed through to ``dataclasses.field``
            (``default``, ``default_factory``, ``repr``...)

    Returns:
        A dataclasses.Field for use in a class body

    Example:
        >>> @dataclass
        ... class User:
        ...     age: int = rule("range:18,99", default=18)
        ...     roles: List[str] = rule("in:admin,user", default_factory=list)
    """
    merged: Dict[str, Any] = dict(metadata or {})
    merged[key] = tag
    return dataclasses.field(metadata=merged, **field_kwargs)


def tagged_field_names(record_type: Any, tag_key: str = DEFAULT_TAG_KEY) -> List[str]:
    """
    List the names of a dataclass type's tagged fields, in declaration order.

    Args:
        record_type: Dataclass type or instance
        tag_key: Metadata key holding validation tags

    Returns:
        List[str]: Names of fields carrying a tag
    """
    return [f.name for f in dataclasses.fields(record_type) if f.metadata and tag_key in f.metadata]
