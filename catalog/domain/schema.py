"""
Resource schemas.

A ``ResourceSchema`` describes one resource family (books, cars): its
fields, the rule each field is validated against, the violation message
for that rule, which fields can be used as exact filters and which
boolean query flags map onto tokens of the tag list.

The write and read services are generic over the schema, so a new
resource family only needs an entity class and a schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Generic, Mapping, Optional, Type, TypeVar

MAX_RATING = 5

E = TypeVar("E")


class FieldKind(str, Enum):
    """Validation rule applied to a field."""

    KEY = "key"                  # natural key: starts with letter, digit or _
    RATING = "rating"            # number in [0, MAX_RATING]
    CHOICE = "choice"            # one of a closed set of tokens
    NON_NEGATIVE = "non_negative"
    FRACTION = "fraction"        # number strictly between 0 and 1
    BOOLEAN = "boolean"
    DATE = "date"                # yyyy-MM-dd
    ISBN = "isbn"                # ISBN-10 / ISBN-13 checksum
    URI = "uri"                  # absolute URI
    TAGS = "tags"                # list of strings


@dataclass(frozen=True)
class FieldSpec:
    """A single field of a resource family."""

    name: str
    kind: FieldKind
    message: str
    required: bool = False
    required_message: str = ""
    choices: Optional[Type[Enum]] = None

    @property
    def tokens(self) -> tuple[str, ...]:
        if self.choices is None:
            return ()
        return tuple(member.value for member in self.choices)


@dataclass(frozen=True)
class ResourceSchema(Generic[E]):
    """
    Field set and rules of a resource family.

    Attributes:
        name: Human readable resource name ("Book")
        entity_class: Domain entity type built from candidates
        fields: Field specs in validation order
        natural_key: Name of the unique, human-meaningful field
        external_id: Name of the unique, immutable code field
        tags: Name of the tag list field
        tag_flags: Query flag name -> tag token
        exact_filters: Fields usable as exact-match filters
    """

    name: str
    entity_class: Type[E]
    fields: tuple[FieldSpec, ...]
    natural_key: str
    external_id: str
    tags: str
    tag_flags: Mapping[str, str] = field(default_factory=dict)
    exact_filters: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        names = self.field_names
        for required in (self.natural_key, self.external_id, self.tags):
            if required not in names:
                raise ValueError(f"{self.name} schema has no field {required!r}")
        unknown = self.exact_filters - set(names)
        if unknown:
            raise ValueError(f"{self.name} schema cannot filter on {sorted(unknown)}")

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(spec.name for spec in self.fields)

    def spec(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @property
    def filter_keys(self) -> frozenset[str]:
        """All criteria keys accepted by the read service."""
        return self.exact_filters | {self.natural_key} | set(self.tag_flags)

    def build(self, candidate: Mapping[str, Any], base: Optional[E] = None) -> E:
        """
        Build an entity from a validated candidate.

        Fields missing from the candidate are cleared. When ``base`` is
        given its identity, version, timestamps and external identifier
        are kept, so the result is a whole-record replacement of ``base``.
        """
        values = {
            spec.name: to_domain_value(spec, candidate.get(spec.name))
            for spec in self.fields
        }

        if base is None:
            return self.entity_class(**values)

        values[self.external_id] = getattr(base, self.external_id)
        return replace(base, **values)


def to_domain_value(spec: FieldSpec, value: Any) -> Any:
    """Convert a raw (already validated) candidate value to its domain type."""
    if value is None:
        return [] if spec.kind == FieldKind.TAGS else None

    if spec.kind == FieldKind.CHOICE and spec.choices is not None:
        return spec.choices(value)
    if spec.kind == FieldKind.DATE and isinstance(value, str):
        return date.fromisoformat(value)
    if spec.kind in (FieldKind.RATING, FieldKind.NON_NEGATIVE, FieldKind.FRACTION):
        return float(value)
    if spec.kind == FieldKind.TAGS:
        return list(value)

    return value
