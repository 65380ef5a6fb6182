"""
Record Validator

This module drives a validation call end to end:

1. Resolve the record to a field source (dataclass instance, or mapping plus
   declarative schema). Anything else is not record-shaped and the call stops
   with a single violation.
2. Walk the fields in declaration order, skipping untagged ones.
3. Report tagged fields that are not exported, without parsing their tag.
4. Parse each remaining tag; a syntax error is recorded and the walk goes on.
5. Check the runtime value against the declared kind, then evaluate it.

Every call builds its own ViolationCollection, so a TagValidator (which holds
only its configuration and an optional schema registry) can be shared freely
between threads.
"""

import logging
from typing import Any, Final, List, Mapping, Optional, Union

from ..core.config import ValidatorConfig
from ..core.enums import ViolationCode
from ..core.exceptions import ConfigurationError, TagSyntaxError
from ..core.models import FieldSpec, ViolationCollection
from .base import ValidationResult
from .evaluator import evaluate_field, matches_kind, violation_message
from .fields import DataclassFieldSource, FieldSource, is_record
from .parser import parse_tag
from .schema import RecordSchema, SchemaRegistry

logger = logging.getLogger(__name__)

NOT_RECORD_MESSAGE = "wrong argument given, should be a record"
INVALID_SYNTAX_MESSAGE = "invalid validator syntax"
UNEXPORTED_FIELD_MESSAGE = "validation for unexported field is not allowed"

SchemaRef = Union[RecordSchema, str]


class TagValidator:
    """
    Validates records against the tags attached to their fields.

    Attributes:
        config (ValidatorConfig): Tag key and logging options
        registry (Optional[SchemaRegistry]): Used to resolve schemas passed by name
    """

    def __init__(
        self,
        config: Optional[ValidatorConfig] = None,
        registry: Optional[SchemaRegistry] = None,
    ):
        if config is None:
            config = ValidatorConfig()
        if not isinstance(config, ValidatorConfig):
            raise ConfigurationError("config must be a ValidatorConfig")
        self.config = config
        self.registry = registry

    def _resolve_schema(self, schema: SchemaRef) -> RecordSchema:
        if isinstance(schema, RecordSchema):
            return schema
        if self.registry is None:
            raise ConfigurationError(f"schema {schema!r} given by name but no registry is configured")
        return self.registry.get(schema)

    def field_source(self, record: Any, schema: Optional[SchemaRef] = None) -> Optional[FieldSource]:
        """
        Pick the introspection adapter for a record.

        Args:
            record: Value to validate
            schema: Schema describing a mapping record, or its registered name

        Returns:
            The field source, or None if the value is not record-shaped
        """
        if schema is not None:
            if isinstance(record, Mapping):
                return self._resolve_schema(schema).field_source(record)
            return None
        if is_record(record):
            return DataclassFieldSource(record, tag_key=self.config.tag_key)
        return None

    def validate(self, record: Any, schema: Optional[SchemaRef] = None) -> ValidationResult:
        """
        Validate a record.

        Malformed data never raises: every problem found becomes exactly one
        violation in the returned result.

        Args:
            record: Dataclass instance, or a mapping when ``schema`` is given
            schema: Schema for mapping records, or its registered name

        Returns:
            ValidationResult: ``is_valid`` is True when nothing was recorded

        Raises:
            ConfigurationError: If ``schema`` is a name and no registry is configured
            KeyError: If ``schema`` is a name the registry does not know
        """
        violations = ViolationCollection()
        result = ValidationResult(violations=violations)
        result.context["record_type"] = type(record).__name__

        resolved = self._resolve_schema(schema) if schema is not None else None
        source = self.field_source(record, resolved)
        if source is None:
            violations.add("", NOT_RECORD_MESSAGE, ViolationCode.NOT_RECORD)
            logger.debug(f"Rejected {type(record).__name__} value: not record-shaped")
            self._log_violations(violations)
            return result

        checked: List[str] = []
        declared: List[str] = []
        for spec in source.fields():
            declared.append(spec.name)
            if not spec.is_tagged:
                continue
            checked.append(spec.name)
            self._check_field(spec, violations)

        if resolved is not None:
            result.context["schema"] = resolved.name
            undeclared = [key for key in record if key not in declared]
            if undeclared:
                result.warnings.append(f"undeclared keys ignored: {', '.join(map(str, undeclared))}")
        result.context["checked_fields"] = checked

        logger.debug(
            f"Validated {type(record).__name__}: {len(checked)} tagged fields, "
            f"{len(violations)} violations"
        )
        self._log_violations(violations)
        return result

    def validate_or_raise(self, record: Any, schema: Optional[SchemaRef] = None) -> None:
        """
        Validate a record and raise on any violation.

        Raises:
            RecordValidationError: If the record has violations
        """
        self.validate(record, schema).raise_for_violations()

    def _check_field(self, spec: FieldSpec, violations: ViolationCollection) -> None:
        if not spec.is_exported:
            logger.warning(f"Tagged field {spec.name!r} is not exported; tag not parsed")
            violations.add(spec.name, UNEXPORTED_FIELD_MESSAGE, ViolationCode.UNEXPORTED_FIELD)
            return

        try:
            descriptor = parse_tag(spec.tag, spec.kind)
        except TagSyntaxError as e:
            logger.warning(f"Field {spec.name!r}: {e.reason} in tag {e.tag_text!r}")
            violations.add(spec.name, INVALID_SYNTAX_MESSAGE, ViolationCode.INVALID_TAG_SYNTAX)
            return

        if not spec.present:
            violations.add(
                spec.name, violation_message(spec.name, "value is missing"), ViolationCode.TYPE_MISMATCH
            )
            return
        if not matches_kind(spec.value, spec.kind):
            violations.add(
                spec.name,
                violation_message(spec.name, f"value does not match declared type {spec.kind.value}"),
                ViolationCode.TYPE_MISMATCH,
            )
            return

        evaluate_field(descriptor, spec.kind, spec.value, spec.name, violations)

    def _log_violations(self, violations: ViolationCollection) -> None:
        if not self.config.log_violations:
            return
        for violation in violations:
            logger.info(f"Violation [{violation.code.value}] {violation.message}")


_VALIDATOR: Final[TagValidator] = TagValidator()


def get_validator() -> TagValidator:
    """Return the process-wide validator with default configuration."""
    return _VALIDATOR


def validate(record: Any, schema: Optional[RecordSchema] = None) -> ValidationResult:
    """
    Validate a record with the default validator.

    Args:
        record: Dataclass instance, or a mapping when ``schema`` is given
        schema: Schema describing a mapping record

    Returns:
        ValidationResult: Success when ``result.is_valid`` is True, otherwise
        ``result.violations`` holds every problem found, in order

    Example:
        >>> @dataclass
        ... class Item:
        ...     count: int = rule("range:1,10")
        >>> print(validate(Item(count=11)).violations)
        wrong field count: the number is not in range
    """
    return _VALIDATOR.validate(record, schema)


def validate_or_raise(record: Any, schema: Optional[RecordSchema] = None) -> None:
    """
    Validate a record with the default validator and raise on violations.

    Raises:
        RecordValidationError: If the record has violations
    """
    _VALIDATOR.validate_or_raise(record, schema)
