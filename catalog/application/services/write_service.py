"""
Write service.

Creates, updates and deletes catalog resources under optimistic
concurrency control. Expected failures are returned as result variants;
only storage faults propagate as exceptions.
"""

from typing import Any, Generic, Mapping, Optional, TypeVar

import structlog

from catalog.application.interfaces.notifications import NotificationSender
from catalog.application.interfaces.repository import ResourceRepository
from catalog.domain.entities.base import AggregateRoot
from catalog.domain.exceptions import DuplicateResourceError
from catalog.domain.identifiers import is_valid_object_id, normalize_object_id
from catalog.domain.results import (
    CreateResult,
    Created,
    Invalid,
    MissingPrecondition,
    NotExists,
    UpdateResult,
    Updated,
    VersionInvalid,
    VersionOutdated,
)
from catalog.domain.schema import ResourceSchema

from .uniqueness import UniquenessChecker
from .validation import Validator
from .version_guard import VersionGuard

logger = structlog.get_logger(__name__)

EntityT = TypeVar("EntityT", bound=AggregateRoot)


class WriteService(Generic[EntityT]):
    """
    Service for writing resources of one family.

    Handles:
    - Validation and uniqueness checks before any write
    - Version token checks and the conditional replace
    - New-resource notifications
    """

    def __init__(
        self,
        schema: ResourceSchema[EntityT],
        repo: ResourceRepository[EntityT],
        notification_sender: NotificationSender,
        validator: Optional[Validator] = None,
        uniqueness: Optional[UniquenessChecker] = None,
        version_guard: Optional[VersionGuard] = None,
    ):
        self.schema = schema
        self.repo = repo
        self.notification_sender = notification_sender
        self.validator = validator or Validator(schema)
        self.uniqueness = uniqueness or UniquenessChecker(schema, repo)
        self.version_guard = version_guard or VersionGuard()

    async def create(self, candidate: Mapping[str, Any]) -> CreateResult:
        """
        Create a new resource with version 0.

        Args:
            candidate: Decoded request body

        Returns:
            Created, or Invalid / KeyExists / ExternalIdExists
        """
        messages = self.validator.validate(candidate, creating=True)
        if messages:
            return Invalid(messages=tuple(messages))

        conflict = await self.uniqueness.check_create(candidate)
        if conflict is not None:
            logger.info(
                "Create rejected",
                resource=self.schema.name,
                code=conflict.code,
                owner_id=conflict.id,
            )
            return conflict

        entity = self.schema.build(candidate)
        entity.version = 0

        try:
            saved = await self.repo.insert(entity)
        except DuplicateResourceError:
            # Lost a race against a concurrent create
            conflict = await self.uniqueness.check_create(candidate)
            if conflict is None:
                raise
            logger.info(
                "Create rejected by unique index",
                resource=self.schema.name,
                code=conflict.code,
            )
            return conflict

        logger.info(
            "Resource created",
            resource=self.schema.name,
            resource_id=saved.id,
        )

        await self._notify_created(saved)

        return Created(id=saved.id)

    async def update(
        self,
        resource_id: str,
        candidate: Mapping[str, Any],
        version_token: Optional[str],
    ) -> UpdateResult:
        """
        Replace a stored resource.

        The external identifier of the stored resource is kept; all
        other fields are taken from ``candidate``.

        Args:
            resource_id: Object id of the resource
            candidate: Decoded request body
            version_token: ``If-Match`` value, e.g. ``"0"``

        Returns:
            Updated with the new version, or one of the failure variants
        """
        if version_token is None:
            return MissingPrecondition(id=resource_id)

        if not is_valid_object_id(resource_id):
            return NotExists(id=resource_id)
        resource_id = normalize_object_id(resource_id)

        version = self.version_guard.parse(version_token)
        if isinstance(version, VersionInvalid):
            return version

        messages = self.validator.validate(candidate, creating=False)
        if messages:
            return Invalid(messages=tuple(messages))

        conflict = await self.uniqueness.check_update(candidate, resource_id)
        if conflict is not None:
            logger.info(
                "Update rejected",
                resource=self.schema.name,
                resource_id=resource_id,
                code=conflict.code,
                owner_id=conflict.id,
            )
            return conflict

        stored = await self.repo.get_by_id(resource_id)
        if stored is None:
            return NotExists(id=resource_id)

        outdated = self.version_guard.check(resource_id, version, stored.version)
        if outdated is not None:
            logger.info(
                "Update rejected",
                resource=self.schema.name,
                resource_id=resource_id,
                code=outdated.code,
                version=version,
                stored_version=stored.version,
            )
            return outdated

        entity = self.schema.build(candidate, base=stored)
        entity.touch()

        try:
            new_version = await self.repo.replace(entity, expected_version=stored.version)
        except DuplicateResourceError:
            conflict = await self.uniqueness.check_update(candidate, resource_id)
            if conflict is None:
                raise
            return conflict

        if new_version is None:
            # Conditional write matched no row
            if await self.repo.get_by_id(resource_id) is None:
                return NotExists(id=resource_id)
            logger.info(
                "Concurrent update detected",
                resource=self.schema.name,
                resource_id=resource_id,
                version=version,
            )
            return VersionOutdated(id=resource_id, version=version)

        logger.info(
            "Resource updated",
            resource=self.schema.name,
            resource_id=resource_id,
            version=new_version,
        )

        return Updated(version=new_version)

    async def delete(self, resource_id: str) -> bool:
        """
        Delete a resource.

        Returns:
            True if a resource was removed; False for unknown or
            malformed ids
        """
        if not is_valid_object_id(resource_id):
            return False

        deleted = await self.repo.delete(normalize_object_id(resource_id))

        if deleted:
            logger.info(
                "Resource deleted",
                resource=self.schema.name,
                resource_id=resource_id,
            )

        return deleted

    async def _notify_created(self, entity: EntityT) -> None:
        name = self.schema.name
        key = getattr(entity, self.schema.natural_key)

        subject = f"New {name} with id {entity.id}"
        body = f"<b>The new {name.lower()} <i>{key}</i> has been created.</b>"

        try:
            await self.notification_sender.send(subject, body)
        except Exception as e:
            logger.warning(
                "Failed to send notification",
                resource=name,
                resource_id=entity.id,
                error=str(e),
            )
