"""Mappers between domain entities and database models.

The domain layer uses enums and dataclasses.
The persistence layer stores primitive values.

This module is the single translation point between them.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Type, TypeVar

from catalog.domain.entities import Book, BookKind, Brand, Car, CarType, Publisher

from .models import BookModel, CarModel

E = TypeVar("E", bound=Enum)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _enum(enum_cls: Type[E], value: Any) -> Optional[E]:
    """Convert `value` to an Enum member; unknown values map to None."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        return None


def _enum_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


# ============================================================
# Book
# ============================================================


def book_model_to_entity(model: BookModel) -> Book:
    return Book(
        id=model.id,
        title=model.title,
        rating=model.rating,
        kind=_enum(BookKind, model.kind),
        publisher=_enum(Publisher, model.publisher),
        price=model.price,
        discount=model.discount,
        available=model.available,
        published=model.published,
        isbn=model.isbn,
        homepage=model.homepage,
        keywords=list(model.keywords or []),
        created_at=model.created_at,
        updated_at=model.updated_at,
        version=model.version,
    )


def book_entity_to_model(entity: Book, model: Optional[BookModel] = None) -> BookModel:
    if model is None:
        model = BookModel()

    model.id = entity.id
    model.title = entity.title
    model.rating = entity.rating
    model.kind = _enum_value(entity.kind)
    model.publisher = _enum_value(entity.publisher)
    model.price = entity.price
    model.discount = entity.discount
    model.available = entity.available
    model.published = entity.published
    model.isbn = entity.isbn
    model.homepage = entity.homepage
    model.keywords = list(entity.keywords)
    model.created_at = entity.created_at
    model.updated_at = entity.updated_at
    model.version = entity.version

    return model


# ============================================================
# Car
# ============================================================


def car_model_to_entity(model: CarModel) -> Car:
    return Car(
        id=model.id,
        model=model.model,
        consumption=model.consumption,
        car_type=_enum(CarType, model.car_type),
        brand=_enum(Brand, model.brand),
        price=model.price,
        discount=model.discount,
        available=model.available,
        released=model.released,
        model_number=model.model_number,
        homepage=model.homepage,
        plants=list(model.plants or []),
        created_at=model.created_at,
        updated_at=model.updated_at,
        version=model.version,
    )


def car_entity_to_model(entity: Car, model: Optional[CarModel] = None) -> CarModel:
    if model is None:
        model = CarModel()

    model.id = entity.id
    model.model = entity.model
    model.consumption = entity.consumption
    model.car_type = _enum_value(entity.car_type)
    model.brand = _enum_value(entity.brand)
    model.price = entity.price
    model.discount = entity.discount
    model.available = entity.available
    model.released = entity.released
    model.model_number = entity.model_number
    model.homepage = entity.homepage
    model.plants = list(entity.plants)
    model.created_at = entity.created_at
    model.updated_at = entity.updated_at
    model.version = entity.version

    return model
