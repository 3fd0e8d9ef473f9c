"""
Abstract repository interfaces.

Defines contracts for data access that the application layer
depends on. Implementations are in the infrastructure layer.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ResourceQuery:
    """
    Translated search criteria.

    Attributes:
        key_contains: Case-insensitive substring of the natural key
        key_equals: Exact natural key
        exact: Field name -> value, all must match
        tags: Tokens that must all be present in the tag list
    """

    key_contains: Optional[str] = None
    key_equals: Optional[str] = None
    exact: dict[str, Any] = field(default_factory=dict)
    tags: tuple[str, ...] = ()


class ResourceRepository(ABC, Generic[T]):
    """
    Repository interface for versioned catalog resources.

    Implementations must enforce unique indexes on the natural key and
    the external identifier and must apply ``replace`` atomically.
    """

    @abstractmethod
    async def get_by_id(self, resource_id: str) -> Optional[T]:
        """Get resource by ID."""
        pass

    @abstractmethod
    async def find(self, query: Optional[ResourceQuery] = None) -> list[T]:
        """Find resources matching ``query``, ordered by natural key."""
        pass

    @abstractmethod
    async def insert(self, entity: T) -> T:
        """
        Insert a new resource with version 0.

        Raises:
            DuplicateResourceError: If a unique index is violated
        """
        pass

    @abstractmethod
    async def replace(self, entity: T, expected_version: int) -> Optional[int]:
        """
        Replace a stored resource if its version still equals ``expected_version``.

        The check and the version increment happen in one conditional write.

        Returns:
            The new version, or None if no row matched (deleted or
            concurrently modified)

        Raises:
            DuplicateResourceError: If a unique index is violated
        """
        pass

    @abstractmethod
    async def delete(self, resource_id: str) -> bool:
        """Delete resource by ID. Returns True if deleted."""
        pass

    @abstractmethod
    async def find_id_by_field(self, field_name: str, value: Any) -> Optional[str]:
        """Return the ID of a resource whose ``field_name`` equals ``value``."""
        pass
