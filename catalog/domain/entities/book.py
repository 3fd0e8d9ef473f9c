"""
Book entity.

A book is identified in the catalog by its title (natural key) and its
ISBN (external identifier, fixed at creation).
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from catalog.domain.schema import FieldKind, FieldSpec, ResourceSchema

from .base import AggregateRoot


class BookKind(str, Enum):
    """Edition of a book."""

    KINDLE = "KINDLE"
    PRINT = "PRINT"


class Publisher(str, Enum):
    """Publishers known to the catalog."""

    FOO_PUBLISHER = "FOO_PUBLISHER"
    BAR_PUBLISHER = "BAR_PUBLISHER"


@dataclass(eq=False)
class Book(AggregateRoot):
    """
    Book entity.

    Attributes:
        title: Unique title
        rating: Rating between 0 and 5
        kind: Edition (Kindle or print)
        publisher: Publisher
        price: Price, never negative
        discount: Discount as a fraction between 0 and 1
        available: Whether the book can be delivered
        published: Publication date
        isbn: ISBN-10 or ISBN-13, immutable after creation
        homepage: Homepage URI
        keywords: Keywords such as JAVASCRIPT or TYPESCRIPT
    """

    title: str = ""
    rating: Optional[float] = None
    kind: Optional[BookKind] = None
    publisher: Optional[Publisher] = None
    price: Optional[float] = None
    discount: Optional[float] = None
    available: Optional[bool] = None
    published: Optional[date] = None
    isbn: Optional[str] = None
    homepage: Optional[str] = None
    keywords: list[str] = field(default_factory=list)


BOOK_SCHEMA: ResourceSchema[Book] = ResourceSchema(
    name="Book",
    entity_class=Book,
    fields=(
        FieldSpec(
            "title", FieldKind.KEY,
            "A book title must start with a letter, a digit or _.",
            required=True, required_message="A book title is required.",
        ),
        FieldSpec("rating", FieldKind.RATING, "A rating must be between 0 and 5."),
        FieldSpec(
            "kind", FieldKind.CHOICE,
            "The kind of a book must be KINDLE or PRINT.",
            required=True, required_message="The kind of a book is required.",
            choices=BookKind,
        ),
        FieldSpec(
            "publisher", FieldKind.CHOICE,
            "The publisher of a book must be FOO_PUBLISHER or BAR_PUBLISHER.",
            required=True, required_message="The publisher of a book is required.",
            choices=Publisher,
        ),
        FieldSpec("price", FieldKind.NON_NEGATIVE, "The price must not be negative."),
        FieldSpec("discount", FieldKind.FRACTION, "The discount must be a value between 0 and 1."),
        FieldSpec("available", FieldKind.BOOLEAN, '"available" must be set to true or false.'),
        FieldSpec("published", FieldKind.DATE, "The date must be in the format yyyy-MM-dd."),
        FieldSpec(
            "isbn", FieldKind.ISBN,
            "The ISBN is not valid.",
            required=True, required_message="An ISBN is required.",
        ),
        FieldSpec("homepage", FieldKind.URI, "The homepage is not a valid URI."),
        FieldSpec("keywords", FieldKind.TAGS, "Keywords must be a list of strings."),
    ),
    natural_key="title",
    external_id="isbn",
    tags="keywords",
    tag_flags={"javascript": "JAVASCRIPT", "typescript": "TYPESCRIPT"},
    exact_filters=frozenset({
        "rating",
        "kind",
        "publisher",
        "price",
        "discount",
        "available",
        "published",
        "isbn",
        "homepage",
    }),
)
