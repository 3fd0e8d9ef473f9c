"""SQLAlchemy ORM models.

Both tables use portable column types so they can be created on SQLite
for tests while PostgreSQL runs in production. Enum values are stored as
plain strings, tag lists as JSON. Free-form strings are unbounded
`Text`.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Date,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import Mapped, mapped_column

from catalog.domain.identifiers import OBJECT_ID_LENGTH

from .connection import Base


class BookModel(Base):
    """Book row."""

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), primary_key=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    publisher: Mapped[str] = mapped_column(String(32), nullable=False)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    discount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    available: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    published: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    isbn: Mapped[str] = mapped_column(Text, nullable=False)
    homepage: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    keywords: Mapped[list] = mapped_column(
        MutableList.as_mutable(JSON), nullable=False, default=list
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("title", name="uq_books_title"),
        UniqueConstraint("isbn", name="uq_books_isbn"),
    )


class CarModel(Base):
    """Car row."""

    __tablename__ = "cars"

    id: Mapped[str] = mapped_column(String(OBJECT_ID_LENGTH), primary_key=True)

    model: Mapped[str] = mapped_column(Text, nullable=False)
    consumption: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    car_type: Mapped[str] = mapped_column(String(16), nullable=False)
    brand: Mapped[str] = mapped_column(String(16), nullable=False)
    price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    discount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    available: Mapped[Optional[bool]] = mapped_column(Boolean, nullable=True)
    released: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    model_number: Mapped[str] = mapped_column(Text, nullable=False)
    homepage: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    plants: Mapped[list] = mapped_column(
        MutableList.as_mutable(JSON), nullable=False, default=list
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=datetime.utcnow)

    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("model", name="uq_cars_model"),
        UniqueConstraint("model_number", name="uq_cars_model_number"),
    )
