"""
Read service.

Resolves resources by id or by search criteria.
"""

from datetime import date
from typing import Any, Generic, Mapping, Optional, TypeVar

import structlog

from catalog.application.interfaces.repository import ResourceQuery, ResourceRepository
from catalog.domain.identifiers import is_valid_object_id, normalize_object_id
from catalog.domain.schema import FieldKind, FieldSpec, ResourceSchema

logger = structlog.get_logger(__name__)

EntityT = TypeVar("EntityT")

# Natural-key criteria shorter than this are substring matches
EXACT_KEY_MIN_LENGTH = 10

_NUMERIC_KINDS = (FieldKind.RATING, FieldKind.NON_NEGATIVE, FieldKind.FRACTION)


class UncoercibleCriterion(ValueError):
    """A criterion value cannot match any stored value."""


def coerce_criterion(spec: FieldSpec, value: Any) -> Any:
    """
    Convert a criterion value (usually a query-string value) to the
    stored type of the field.

    Raises:
        UncoercibleCriterion: If the value cannot be converted
    """
    if spec.kind in _NUMERIC_KINDS:
        if isinstance(value, bool):
            raise UncoercibleCriterion(spec.name)
        try:
            return float(value)
        except (TypeError, ValueError):
            raise UncoercibleCriterion(spec.name)

    if spec.kind == FieldKind.BOOLEAN:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise UncoercibleCriterion(spec.name)

    if spec.kind == FieldKind.DATE:
        if isinstance(value, date):
            return value
        try:
            return date.fromisoformat(str(value))
        except ValueError:
            raise UncoercibleCriterion(spec.name)

    if spec.kind == FieldKind.CHOICE:
        if value not in spec.tokens:
            raise UncoercibleCriterion(spec.name)
        return spec.choices(value)

    return str(value)


def _is_set(flag: Any) -> bool:
    return flag is True or flag == "true"


class ReadService(Generic[EntityT]):
    """Service for reading resources of one family."""

    def __init__(
        self,
        schema: ResourceSchema[EntityT],
        repo: ResourceRepository[EntityT],
    ):
        self.schema = schema
        self.repo = repo

    async def find_by_id(self, resource_id: str) -> Optional[EntityT]:
        """Get resource by ID; malformed ids never reach storage."""
        if not is_valid_object_id(resource_id):
            return None
        return await self.repo.get_by_id(normalize_object_id(resource_id))

    async def find(
        self,
        criteria: Optional[Mapping[str, Any]] = None,
    ) -> list[EntityT]:
        """
        Find resources matching all criteria, ordered by natural key.

        Args:
            criteria: Natural key, tag flags or exact field values.
                Unknown keys make the whole query match nothing.

        Returns:
            Matching resources (possibly empty)
        """
        if not criteria:
            return await self.repo.find()

        query = self.build_query(criteria)
        if query is None:
            return []

        return await self.repo.find(query)

    def build_query(self, criteria: Mapping[str, Any]) -> Optional[ResourceQuery]:
        """Translate criteria; None means nothing can match."""
        unknown = set(criteria) - self.schema.filter_keys
        if unknown:
            logger.info(
                "Unknown search criteria",
                resource=self.schema.name,
                keys=sorted(unknown),
            )
            return None

        key_contains = None
        key_equals = None
        exact: dict[str, Any] = {}
        tags: list[str] = []

        for name, value in criteria.items():
            if name == self.schema.natural_key:
                key = str(value)
                if len(key) < EXACT_KEY_MIN_LENGTH:
                    key_contains = key
                else:
                    key_equals = key
            elif name in self.schema.tag_flags:
                if _is_set(value):
                    tags.append(self.schema.tag_flags[name])
            else:
                try:
                    exact[name] = coerce_criterion(self.schema.spec(name), value)
                except UncoercibleCriterion:
                    logger.debug(
                        "Uncoercible search criterion",
                        resource=self.schema.name,
                        field=name,
                    )
                    return None

        return ResourceQuery(
            key_contains=key_contains,
            key_equals=key_equals,
            exact=exact,
            tags=tuple(sorted(tags)),
        )
