"""
Book repository implementation.
"""

from typing import Optional

from catalog.domain.entities import BOOK_SCHEMA, Book
from catalog.infrastructure.database.mappers import (
    book_entity_to_model,
    book_model_to_entity,
)
from catalog.infrastructure.database.models import BookModel

from .base import BaseRepository


class SqlAlchemyBookRepository(BaseRepository[BookModel, Book]):
    """SQLAlchemy implementation of the book repository."""

    model_class = BookModel
    schema = BOOK_SCHEMA

    def _to_entity(self, model: BookModel) -> Book:
        return book_model_to_entity(model)

    def _to_model(self, entity: Book, model: Optional[BookModel] = None) -> BookModel:
        return book_entity_to_model(entity, model)
