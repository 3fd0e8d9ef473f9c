"""
Candidate validation.

Checks a candidate (the decoded request body) against the rules of a
resource schema. Every rule is evaluated and every violation reported,
one message per violated rule, in schema field order.
"""

import re
from datetime import date
from typing import Any, Callable, Mapping
from urllib.parse import urlsplit

import structlog

from catalog.domain.schema import MAX_RATING, FieldKind, FieldSpec, ResourceSchema

logger = structlog.get_logger(__name__)

_KEY_PATTERN = re.compile(r"^\w", re.ASCII)
_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")
_HIERARCHICAL_SCHEMES = {"http", "https", "ftp", "ftps", "ws", "wss"}

# Server-managed properties a client may echo back from a read.
ID_PROPERTY = "id"
VERSION_PROPERTY = "version"
VERSION_MESSAGE = "The version must be at least 0."


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_key(value: Any) -> bool:
    """Natural keys start with a letter, a digit or an underscore."""
    return isinstance(value, str) and _KEY_PATTERN.match(value) is not None


def is_valid_rating(value: Any) -> bool:
    return _is_number(value) and 0 <= value <= MAX_RATING


def is_valid_non_negative(value: Any) -> bool:
    return _is_number(value) and value >= 0


def is_valid_fraction(value: Any) -> bool:
    return _is_number(value) and 0 < value < 1


def is_valid_date(value: Any) -> bool:
    """Dates are ``date`` objects or strings in the format yyyy-MM-dd."""
    if isinstance(value, date):
        return True
    if not isinstance(value, str) or not _DATE_PATTERN.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def is_valid_isbn(value: Any) -> bool:
    """
    Check an ISBN-10 or ISBN-13 including its check digit.

    Hyphens and spaces are accepted as group separators.
    """
    if not isinstance(value, str):
        return False

    digits = value.replace("-", "").replace(" ", "")

    if len(digits) == 10:
        if not digits[:9].isdigit():
            return False
        last = digits[9].upper()
        if last != "X" and not last.isdigit():
            return False
        numbers = [int(d) for d in digits[:9]] + [10 if last == "X" else int(last)]
        total = sum(weight * n for weight, n in zip(range(10, 0, -1), numbers))
        return total % 11 == 0

    if len(digits) == 13 and digits.isdigit():
        total = sum(
            int(d) * (3 if i % 2 else 1)
            for i, d in enumerate(digits)
        )
        return total % 10 == 0

    return False


def is_valid_uri(value: Any) -> bool:
    """Absolute URIs: a scheme plus, for web schemes, a host."""
    if not isinstance(value, str) or not value or any(c.isspace() for c in value):
        return False

    try:
        parts = urlsplit(value)
    except ValueError:
        return False

    if not parts.scheme or not _SCHEME_PATTERN.match(parts.scheme):
        return False
    if parts.scheme.lower() in _HIERARCHICAL_SCHEMES:
        return bool(parts.netloc)
    return bool(parts.netloc or parts.path)


def is_valid_version(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def is_valid_tags(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(tag, str) for tag in value)


def _rule_for(spec: FieldSpec) -> Callable[[Any], bool]:
    if spec.kind == FieldKind.CHOICE:
        tokens = spec.tokens
        return lambda value: isinstance(value, str) and value in tokens
    return _RULES[spec.kind]


_RULES: dict[FieldKind, Callable[[Any], bool]] = {
    FieldKind.KEY: is_valid_key,
    FieldKind.RATING: is_valid_rating,
    FieldKind.NON_NEGATIVE: is_valid_non_negative,
    FieldKind.FRACTION: is_valid_fraction,
    FieldKind.BOOLEAN: lambda value: isinstance(value, bool),
    FieldKind.DATE: is_valid_date,
    FieldKind.ISBN: is_valid_isbn,
    FieldKind.URI: is_valid_uri,
    FieldKind.TAGS: is_valid_tags,
}


class Validator:
    """Validates candidates of one resource family."""

    def __init__(self, schema: ResourceSchema):
        self.schema = schema
        self._rules = {spec.name: _rule_for(spec) for spec in schema.fields}

    def validate(self, candidate: Mapping[str, Any], *, creating: bool) -> list[str]:
        """
        Validate a candidate.

        Args:
            candidate: Field name -> raw value
            creating: Whether the candidate is for a new resource. The
                external identifier is only required on creation.

        The server-managed ``id`` and ``version`` properties may be present,
        as in a body read back from the API. They never reach the entity;
        ``version`` must still be a non-negative integer.

        Returns:
            Violation messages; empty if the candidate is valid
        """
        messages: list[str] = []

        known = set(self.schema.field_names) | {ID_PROPERTY, VERSION_PROPERTY}
        for name in candidate:
            if name not in known:
                messages.append(f"Unknown property: {name}.")

        for spec in self.schema.fields:
            value = candidate.get(spec.name)

            if value is None:
                if self._is_required(spec, creating):
                    messages.append(spec.required_message or spec.message)
                continue

            if not self._rules[spec.name](value):
                messages.append(spec.message)

        version = candidate.get(VERSION_PROPERTY)
        if version is not None and not is_valid_version(version):
            messages.append(VERSION_MESSAGE)

        if messages:
            logger.debug(
                "Candidate rejected",
                resource=self.schema.name,
                violations=messages,
            )

        return messages

    def _is_required(self, spec: FieldSpec, creating: bool) -> bool:
        if spec.name == self.schema.external_id:
            return creating
        return spec.required
