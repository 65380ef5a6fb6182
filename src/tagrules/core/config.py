"""
Validator configuration.

Holds the few knobs that change how records are introspected and how
violations are logged. A configuration is immutable after construction so a
single validator can be shared between threads.
"""

from .exceptions import ConfigurationError

DEFAULT_TAG_KEY = "validate"


class ValidatorConfig:
    """
    Configuration for record validation.

    Attributes:
        tag_key: Dataclass field metadata key holding the validation tag
        log_violations: Whether to log every recorded violation at INFO level
    """

    __slots__ = ("_tag_key", "_log_violations")

    def __init__(self, tag_key: str = DEFAULT_TAG_KEY, log_violations: bool = False):
        if not isinstance(tag_key, str) or not tag_key.strip():
            raise ConfigurationError("tag_key must be a non-empty string")
        self._tag_key = tag_key
        self._log_violations = bool(log_violations)

    @property
    def tag_key(self) -> str:
        return self._tag_key

    @property
    def log_violations(self) -> bool:
        return self._log_violations

    def __repr__(self) -> str:
        return f"ValidatorConfig(tag_key={self._tag_key!r}, log_violations={self._log_violations})"
