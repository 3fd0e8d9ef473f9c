"""
Base repository implementation.

Provides the versioned resource operations shared by all catalog
repositories, including the conditional replace used for optimistic
locking.
"""

from enum import Enum
from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy import inspect, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase

import structlog

from catalog.application.interfaces.repository import ResourceQuery, ResourceRepository
from catalog.domain.exceptions import DuplicateResourceError
from catalog.domain.schema import ResourceSchema

logger = structlog.get_logger(__name__)

ModelT = TypeVar("ModelT", bound=DeclarativeBase)
EntityT = TypeVar("EntityT")

# Columns a replace never writes
_IMMUTABLE_COLUMNS = frozenset({"id", "created_at", "version"})


def _like_pattern(value: str) -> str:
    """Literal substring pattern for LIKE with ``\\`` as escape character."""
    escaped = (
        value.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    return f"%{escaped}%"


def _db_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class BaseRepository(ResourceRepository[EntityT], Generic[ModelT, EntityT]):
    """
    Base repository for versioned resources.

    Implements:
    - Lookups by id, by field and by search query
    - Inserts guarded by the unique indexes
    - Compare-and-increment replace on the version column
    """

    model_class: Type[ModelT]
    schema: ResourceSchema

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: ModelT) -> EntityT:
        """Convert model to domain entity. Override in subclass."""
        raise NotImplementedError

    def _to_model(
        self,
        entity: EntityT,
        model: Optional[ModelT] = None,
    ) -> ModelT:
        """Convert domain entity to model. Override in subclass."""
        raise NotImplementedError

    def _column(self, name: str):
        return getattr(self.model_class, name)

    async def get_by_id(self, entity_id: str) -> Optional[EntityT]:
        """
        Get entity by ID.

        Always reloads the row so a version bumped by ``replace`` is seen.

        Args:
            entity_id: Object id

        Returns:
            Entity if found, None otherwise
        """
        stmt = (
            select(self.model_class)
            .where(self.model_class.id == entity_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def find(self, query: Optional[ResourceQuery] = None) -> list[EntityT]:
        """
        Find entities matching ``query``, ordered by natural key.

        Tag subsets are checked after loading, since JSON containment is
        not portable across backends.
        """
        key_column = self._column(self.schema.natural_key)
        stmt = select(self.model_class).execution_options(populate_existing=True)

        if query is not None:
            if query.key_contains is not None:
                stmt = stmt.where(
                    key_column.ilike(_like_pattern(query.key_contains), escape="\\")
                )
            if query.key_equals is not None:
                stmt = stmt.where(key_column == query.key_equals)
            for name, value in query.exact.items():
                stmt = stmt.where(self._column(name) == _db_value(value))

        stmt = stmt.order_by(key_column.asc())

        result = await self.session.execute(stmt)
        entities = [self._to_entity(m) for m in result.scalars().all()]

        if query is not None and query.tags:
            entities = [
                entity for entity in entities
                if set(query.tags).issubset(getattr(entity, self.schema.tags) or [])
            ]

        return entities

    async def insert(self, entity: EntityT) -> EntityT:
        """
        Insert a new entity.

        Raises:
            DuplicateResourceError: If a unique index is violated
        """
        model = self._to_model(entity)
        self.session.add(model)

        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            logger.info(
                "Insert rejected by unique index",
                resource=self.schema.name,
                entity_id=entity.id,
            )
            raise DuplicateResourceError(self.schema.name, str(e.orig)) from e

        await self.session.refresh(model)

        return self._to_entity(model)

    async def replace(self, entity: EntityT, expected_version: int) -> Optional[int]:
        """
        Replace a stored entity if its version is still ``expected_version``.

        Issues a single conditional UPDATE that also increments the version.

        Returns:
            New version, or None if no row matched
        """
        values = self._column_values(entity)
        table = self.model_class.__table__

        stmt = (
            update(table)
            .where(table.c.id == entity.id)
            .where(table.c.version == expected_version)
            .values(**values, version=table.c.version + 1)
        )

        try:
            result = await self.session.execute(stmt)
        except IntegrityError as e:
            await self.session.rollback()
            logger.info(
                "Replace rejected by unique index",
                resource=self.schema.name,
                entity_id=entity.id,
            )
            raise DuplicateResourceError(self.schema.name, str(e.orig)) from e

        if result.rowcount != 1:
            logger.debug(
                "Conditional replace matched no row",
                resource=self.schema.name,
                entity_id=entity.id,
                expected_version=expected_version,
            )
            return None

        return expected_version + 1

    async def delete(self, entity_id: str) -> bool:
        """
        Delete entity by ID.

        Args:
            entity_id: Object id

        Returns:
            True if deleted, False if not found
        """
        stmt = select(self.model_class).where(
            self.model_class.id == entity_id
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return False

        await self.session.delete(model)
        await self.session.flush()

        return True

    async def find_id_by_field(self, field_name: str, value: Any) -> Optional[str]:
        """Return the ID of a resource whose ``field_name`` equals ``value``."""
        stmt = (
            select(self.model_class.id)
            .where(self._column(field_name) == _db_value(value))
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    def _column_values(self, entity: EntityT) -> dict[str, Any]:
        model = self._to_model(entity)
        return {
            attr.key: getattr(model, attr.key)
            for attr in inspect(self.model_class).column_attrs
            if attr.key not in _IMMUTABLE_COLUMNS
        }
