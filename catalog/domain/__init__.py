"""
Domain layer module.

Contains catalog entities, resource schemas, write results and domain
exceptions. This layer is independent of infrastructure and frameworks.
"""

from .entities import (
    # Base
    Entity,
    AggregateRoot,
    # Book
    BOOK_SCHEMA,
    Book,
    BookKind,
    Publisher,
    # Car
    CAR_SCHEMA,
    Brand,
    Car,
    CarType,
)
from .exceptions import DomainException, DuplicateResourceError
from .identifiers import is_valid_object_id, new_object_id
from .results import (
    CreateResult,
    Created,
    ExternalIdExists,
    Invalid,
    KeyExists,
    MissingPrecondition,
    NotExists,
    UpdateResult,
    Updated,
    VersionInvalid,
    VersionOutdated,
    WriteFailure,
)
from .schema import MAX_RATING, FieldKind, FieldSpec, ResourceSchema

__all__ = [
    # Entities
    "Entity",
    "AggregateRoot",
    "BOOK_SCHEMA",
    "Book",
    "BookKind",
    "Publisher",
    "CAR_SCHEMA",
    "Brand",
    "Car",
    "CarType",
    # Schema
    "MAX_RATING",
    "FieldKind",
    "FieldSpec",
    "ResourceSchema",
    # Identifiers
    "is_valid_object_id",
    "new_object_id",
    # Results
    "CreateResult",
    "Created",
    "ExternalIdExists",
    "Invalid",
    "KeyExists",
    "MissingPrecondition",
    "NotExists",
    "UpdateResult",
    "Updated",
    "VersionInvalid",
    "VersionOutdated",
    "WriteFailure",
    # Exceptions
    "DomainException",
    "DuplicateResourceError",
]
