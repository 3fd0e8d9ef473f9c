"""
API dependencies.

FastAPI dependency injection for services and repositories.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.application.interfaces.notifications import NotificationSender
from catalog.application.services import ReadService, WriteService
from catalog.domain.entities import BOOK_SCHEMA, CAR_SCHEMA, Book, Car
from catalog.infrastructure.database import get_session
from catalog.infrastructure.database.repositories import (
    SqlAlchemyBookRepository,
    SqlAlchemyCarRepository,
)
from catalog.infrastructure.notifications import MailNotificationSender


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async with get_session() as session:
        yield session


async def get_notification_sender() -> AsyncGenerator[NotificationSender, None]:
    """Get mail notification sender; its HTTP session lives for one request."""
    sender = MailNotificationSender()
    try:
        yield sender
    finally:
        await sender.close()


# Repository dependencies

async def get_book_repo(
    session: AsyncSession = Depends(get_db_session),
) -> SqlAlchemyBookRepository:
    """Get book repository."""
    return SqlAlchemyBookRepository(session)


async def get_car_repo(
    session: AsyncSession = Depends(get_db_session),
) -> SqlAlchemyCarRepository:
    """Get car repository."""
    return SqlAlchemyCarRepository(session)


# Service dependencies

async def get_book_read_service(
    repo: SqlAlchemyBookRepository = Depends(get_book_repo),
) -> ReadService[Book]:
    """Get book read service."""
    return ReadService(BOOK_SCHEMA, repo)


async def get_book_write_service(
    repo: SqlAlchemyBookRepository = Depends(get_book_repo),
    sender: NotificationSender = Depends(get_notification_sender),
) -> WriteService[Book]:
    """Get book write service."""
    return WriteService(BOOK_SCHEMA, repo, sender)


async def get_car_read_service(
    repo: SqlAlchemyCarRepository = Depends(get_car_repo),
) -> ReadService[Car]:
    """Get car read service."""
    return ReadService(CAR_SCHEMA, repo)


async def get_car_write_service(
    repo: SqlAlchemyCarRepository = Depends(get_car_repo),
    sender: NotificationSender = Depends(get_notification_sender),
) -> WriteService[Car]:
    """Get car write service."""
    return WriteService(CAR_SCHEMA, repo, sender)
