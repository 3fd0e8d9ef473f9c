"""
Repository implementations.
"""

from .base import BaseRepository
from .book_repo import SqlAlchemyBookRepository
from .car_repo import SqlAlchemyCarRepository

__all__ = [
    "BaseRepository",
    "SqlAlchemyBookRepository",
    "SqlAlchemyCarRepository",
]
