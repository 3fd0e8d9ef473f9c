"""
Uniqueness checks for natural keys and external identifiers.
"""

from typing import Any, Mapping, Optional, Union

from catalog.application.interfaces.repository import ResourceRepository
from catalog.domain.results import ExternalIdExists, KeyExists
from catalog.domain.schema import ResourceSchema


class UniquenessChecker:
    """
    Looks up which stored resource owns a natural key or external id.

    Both lookups are exact and case-sensitive. The storage unique indexes
    remain the final word; these checks only produce typed conflicts
    before a write is attempted.
    """

    def __init__(self, schema: ResourceSchema, repo: ResourceRepository):
        self.schema = schema
        self.repo = repo

    async def find_key_owner(self, value: Any) -> Optional[str]:
        """Return the ID of the resource using natural key ``value``."""
        if value is None:
            return None
        return await self.repo.find_id_by_field(self.schema.natural_key, value)

    async def find_external_id_owner(self, value: Any) -> Optional[str]:
        """Return the ID of the resource using external id ``value``."""
        if value is None:
            return None
        return await self.repo.find_id_by_field(self.schema.external_id, value)

    async def check_create(
        self,
        candidate: Mapping[str, Any],
    ) -> Union[KeyExists, ExternalIdExists, None]:
        """Natural key first, then external id."""
        key = candidate.get(self.schema.natural_key)
        owner = await self.find_key_owner(key)
        if owner is not None:
            return KeyExists(key=key, id=owner)

        external_id = candidate.get(self.schema.external_id)
        owner = await self.find_external_id_owner(external_id)
        if owner is not None:
            return ExternalIdExists(external_id=external_id, id=owner)

        return None

    async def check_update(
        self,
        candidate: Mapping[str, Any],
        resource_id: str,
    ) -> Optional[KeyExists]:
        """A resource may keep its own natural key."""
        key = candidate.get(self.schema.natural_key)
        owner = await self.find_key_owner(key)
        if owner is not None and owner != resource_id:
            return KeyExists(key=key, id=owner)
        return None
