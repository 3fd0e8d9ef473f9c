"""
Pytest configuration and shared fixtures.
"""

from typing import AsyncGenerator
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.config import clear_settings_cache
from catalog.infrastructure.database.connection import Base

TEST_API_KEY = "test-api-key"


# ============================================================
# Settings
# ============================================================

@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Isolate every test from the developer's environment."""
    monkeypatch.setenv("DB_URL", "sqlite+aiosqlite:///:memory:")
    monkeypatch.setenv("SECURITY_API_KEY", TEST_API_KEY)
    monkeypatch.setenv("LOG_FORMAT", "console")
    monkeypatch.delenv("MAIL_RELAY_URL", raising=False)
    clear_settings_cache()
    yield
    clear_settings_cache()


# ============================================================
# Database Fixtures
# ============================================================

@pytest_asyncio.fixture
async def async_engine():
    """Create async SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    async_session_factory = sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def book_repo(db_session):
    from catalog.infrastructure.database.repositories import SqlAlchemyBookRepository

    return SqlAlchemyBookRepository(db_session)


@pytest.fixture
def car_repo(db_session):
    from catalog.infrastructure.database.repositories import SqlAlchemyCarRepository

    return SqlAlchemyCarRepository(db_session)


# ============================================================
# Mock Fixtures
# ============================================================

@pytest.fixture
def mock_notification_sender():
    """Create mock notification sender."""
    sender = AsyncMock()
    sender.send = AsyncMock(return_value=True)
    return sender


@pytest.fixture
def mock_repo():
    """Create mock resource repository with an empty store."""
    repo = AsyncMock()
    repo.get_by_id = AsyncMock(return_value=None)
    repo.find = AsyncMock(return_value=[])
    repo.insert = AsyncMock(side_effect=lambda entity: entity)
    repo.replace = AsyncMock(return_value=None)
    repo.delete = AsyncMock(return_value=False)
    repo.find_id_by_field = AsyncMock(return_value=None)
    return repo


# ============================================================
# Services
# ============================================================

@pytest.fixture
def book_write_service(book_repo, mock_notification_sender):
    from catalog.application.services import WriteService
    from catalog.domain.entities import BOOK_SCHEMA

    return WriteService(BOOK_SCHEMA, book_repo, mock_notification_sender)


@pytest.fixture
def book_read_service(book_repo):
    from catalog.application.services import ReadService
    from catalog.domain.entities import BOOK_SCHEMA

    return ReadService(BOOK_SCHEMA, book_repo)


@pytest.fixture
def car_write_service(car_repo, mock_notification_sender):
    from catalog.application.services import WriteService
    from catalog.domain.entities import CAR_SCHEMA

    return WriteService(CAR_SCHEMA, car_repo, mock_notification_sender)


@pytest.fixture
def car_read_service(car_repo):
    from catalog.application.services import ReadService
    from catalog.domain.entities import CAR_SCHEMA

    return ReadService(CAR_SCHEMA, car_repo)


# ============================================================
# Candidate Factories
# ============================================================

@pytest.fixture
def book_candidate():
    """Factory for valid book request bodies."""

    def create(**overrides) -> dict:
        candidate = {
            "title": "Alpha",
            "rating": 4,
            "kind": "PRINT",
            "publisher": "FOO_PUBLISHER",
            "price": 11.1,
            "discount": 0.011,
            "available": True,
            "published": "2022-02-01",
            "isbn": "9783897225831",
            "homepage": "https://acme.at",
            "keywords": ["JAVASCRIPT"],
        }
        candidate.update(overrides)
        return {k: v for k, v in candidate.items() if v is not None}

    return create


@pytest.fixture
def car_candidate():
    """Factory for valid car request bodies."""

    def create(**overrides) -> dict:
        candidate = {
            "model": "Roadster",
            "consumption": 3.5,
            "car_type": "SPORTS_CAR",
            "brand": "BMW",
            "price": 45000.0,
            "discount": 0.05,
            "available": True,
            "released": "2021-06-15",
            "model_number": "9780201633610",
            "homepage": "https://bmw.example.com",
            "plants": ["ESSLINGEN"],
        }
        candidate.update(overrides)
        return {k: v for k, v in candidate.items() if v is not None}

    return create
