"""
Database infrastructure module.
"""

from .connection import (
    Base,
    get_engine,
    get_session_factory,
    get_session,
    init_database,
    close_database,
)
from .models import BookModel, CarModel
from .repositories import (
    BaseRepository,
    SqlAlchemyBookRepository,
    SqlAlchemyCarRepository,
)

__all__ = [
    # Connection
    "Base",
    "get_engine",
    "get_session_factory",
    "get_session",
    "init_database",
    "close_database",
    # Models
    "BookModel",
    "CarModel",
    # Repositories
    "BaseRepository",
    "SqlAlchemyBookRepository",
    "SqlAlchemyCarRepository",
]
