"""
Tag Grammar Parser

This module turns a raw validation tag plus the declared kind of the field it
is attached to into a ConstraintDescriptor. The grammar is:

    tag      := prefix args
    prefix   := "len:" | "in:" | "min:" | "max:" | "range:"
    args     := token ("," token)*

Integer tokens are an optional sign followed by ASCII decimal digits. Any
deviation (unknown prefix, empty first token, a non-integer where an integer
is required, ``len:`` on an integer field, fewer than two ``range:`` tokens)
raises TagSyntaxError. Parsing is pure and has no side effects besides debug
logging.
"""

import logging
import re
from typing import List, Optional

from ..core.enums import ConstraintKind, FieldKind
from ..core.exceptions import TagSyntaxError
from ..core.models import ConstraintDescriptor

logger = logging.getLogger(__name__)

_INTEGER_TOKEN = re.compile(r"[+-]?[0-9]+", re.ASCII)

# Prefixes are disjoint, so the first match is the only match.
_PREFIXES = tuple(kind.prefix for kind in ConstraintKind)


def parse_integer(token: str) -> Optional[int]:
    """
    Parse a decimal integer token.

    Only an optional sign followed by ASCII digits is accepted. Surrounding
    whitespace, underscores and non-ASCII digits are rejected even though
    ``int()`` would take them.

    Args:
        token: Token to parse

    Returns:
        The integer value, or None if the token is not an integer
    """
    if not _INTEGER_TOKEN.fullmatch(token):
        return None
    return int(token)


def _require_integer(token: str, tag_text: str) -> int:
    value = parse_integer(token)
    if value is None:
        raise TagSyntaxError(tag_text, f"argument {token!r} is not an integer")
    return value


def split_prefix(tag_text: str) -> Optional[ConstraintKind]:
    """
    Identify the rule family of a tag from its prefix.

    Args:
        tag_text: Raw tag text

    Returns:
        The matching ConstraintKind, or None if no recognized prefix starts the tag
    """
    for kind in ConstraintKind:
        if tag_text.startswith(kind.prefix):
            return kind
    return None


def parse_tag(tag_text: str, field_kind: Optional[FieldKind]) -> ConstraintDescriptor:
    """
    Parse a validation tag for a field of the given kind.

    Args:
        tag_text: Raw tag text, for example ``"range:1,10"``
        field_kind: Declared kind of the field, None if the declared type is
            not one of the supported kinds

    Returns:
        ConstraintDescriptor: Descriptor with exactly one active rule family

    Raises:
        TagSyntaxError: If the tag does not follow the grammar or is not legal
            for the field kind

    Example:
        >>> parse_tag("range:1,10", FieldKind.INTEGER)
        ConstraintDescriptor(kind=<ConstraintKind.RANGE: 'range'>, membership_values=(), exact_length=None, lower_bound=1, upper_bound=10)
    """
    if not isinstance(tag_text, str):
        raise TagSyntaxError(str(tag_text), "tag must be a string")
    if not isinstance(field_kind, FieldKind):
        raise TagSyntaxError(tag_text, "field type is not supported")

    kind = split_prefix(tag_text)
    if kind is None:
        raise TagSyntaxError(tag_text, f"tag must start with one of {', '.join(_PREFIXES)}")
    if kind is ConstraintKind.LENGTH and not field_kind.is_string:
        raise TagSyntaxError(tag_text, "len is only allowed on string fields")

    tokens: List[str] = tag_text[len(kind.prefix):].split(",")
    if not tokens[0]:
        raise TagSyntaxError(tag_text, "missing argument")

    if kind is ConstraintKind.MEMBERSHIP:
        if not field_kind.is_string:
            for token in tokens:
                _require_integer(token, tag_text)
        descriptor = ConstraintDescriptor(kind=kind, membership_values=tuple(tokens))
    elif kind is ConstraintKind.LENGTH:
        length = _require_integer(tokens[0], tag_text)
        if length < 0:
            raise TagSyntaxError(tag_text, "length must be non-negative")
        descriptor = ConstraintDescriptor(kind=kind, exact_length=length)
    elif kind is ConstraintKind.MINIMUM:
        descriptor = ConstraintDescriptor(kind=kind, lower_bound=_require_integer(tokens[0], tag_text))
    elif kind is ConstraintKind.MAXIMUM:
        descriptor = ConstraintDescriptor(kind=kind, upper_bound=_require_integer(tokens[0], tag_text))
    else:
        if len(tokens) < 2:
            raise TagSyntaxError(tag_text, "range requires a lower and an upper bound")
        # No ordering check: an inverted range rejects every value.
        descriptor = ConstraintDescriptor(
            kind=kind,
            lower_bound=_require_integer(tokens[0], tag_text),
            upper_bound=_require_integer(tokens[1], tag_text),
        )

    logger.debug(f"Parsed tag {tag_text!r} for {field_kind.value} field: {descriptor.kind.value}")
    return descriptor
