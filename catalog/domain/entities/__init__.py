"""
Domain entities module.

Contains the catalog resources and their schemas.
"""

from .base import Entity, AggregateRoot
from .book import (
    BOOK_SCHEMA,
    Book,
    BookKind,
    Publisher,
)
from .car import (
    CAR_SCHEMA,
    Brand,
    Car,
    CarType,
)

__all__ = [
    # Base
    "Entity",
    "AggregateRoot",
    # Book
    "BOOK_SCHEMA",
    "Book",
    "BookKind",
    "Publisher",
    # Car
    "CAR_SCHEMA",
    "Brand",
    "Car",
    "CarType",
]
