"""
Base entity classes for the domain layer.

All domain entities inherit from these base classes to ensure
consistent behavior and identification.
"""

from abc import ABC
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from catalog.domain.identifiers import new_object_id


@dataclass
class Entity(ABC):
    """
    Base class for all domain entities.

    Provides:
    - Unique identifier (object id)
    - Creation timestamp
    - Update timestamp
    - Equality based on ID
    """

    id: str = field(default_factory=new_object_id)
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Entity):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.utcnow()


@dataclass(eq=False)
class AggregateRoot(Entity):
    """
    Base class for aggregate roots.

    Aggregate roots are the main entry points for domain operations.
    They ensure consistency within their boundaries.
    """

    version: int = field(default=0)
