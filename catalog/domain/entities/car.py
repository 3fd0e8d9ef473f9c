"""
Car entity.

A car is identified in the catalog by its model name (natural key) and
its model number (external identifier, fixed at creation).
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from catalog.domain.schema import FieldKind, FieldSpec, ResourceSchema

from .base import AggregateRoot


class CarType(str, Enum):
    """Body style of a car."""

    FAMILY_CAR = "FAMILY_CAR"
    SPORTS_CAR = "SPORTS_CAR"


class Brand(str, Enum):
    """Car brands known to the catalog."""

    AUDI = "AUDI"
    BMW = "BMW"


@dataclass(eq=False)
class Car(AggregateRoot):
    """Car entity. ``plants`` lists the plants the model is built in."""

    model: str = ""
    consumption: Optional[float] = None
    car_type: Optional[CarType] = None
    brand: Optional[Brand] = None
    price: Optional[float] = None
    discount: Optional[float] = None
    available: Optional[bool] = None
    released: Optional[date] = None
    model_number: Optional[str] = None
    homepage: Optional[str] = None
    plants: list[str] = field(default_factory=list)


CAR_SCHEMA: ResourceSchema[Car] = ResourceSchema(
    name="Car",
    entity_class=Car,
    fields=(
        FieldSpec(
            "model", FieldKind.KEY,
            "A car model must start with a letter, a digit or _.",
            required=True, required_message="A car model is required.",
        ),
        FieldSpec("consumption", FieldKind.RATING, "The consumption must be between 0 and 5."),
        FieldSpec(
            "car_type", FieldKind.CHOICE,
            "The type of a car must be FAMILY_CAR or SPORTS_CAR.",
            required=True, required_message="The type of a car is required.",
            choices=CarType,
        ),
        FieldSpec(
            "brand", FieldKind.CHOICE,
            "The brand of a car must be AUDI or BMW.",
            required=True, required_message="The brand of a car is required.",
            choices=Brand,
        ),
        FieldSpec("price", FieldKind.NON_NEGATIVE, "The price must not be negative."),
        FieldSpec("discount", FieldKind.FRACTION, "The discount must be a value between 0 and 1."),
        FieldSpec("available", FieldKind.BOOLEAN, '"available" must be set to true or false.'),
        FieldSpec("released", FieldKind.DATE, "The date must be in the format yyyy-MM-dd."),
        FieldSpec(
            "model_number", FieldKind.ISBN,
            "The model number is not valid.",
            required=True, required_message="A model number is required.",
        ),
        FieldSpec("homepage", FieldKind.URI, "The homepage is not a valid URI."),
        FieldSpec("plants", FieldKind.TAGS, "Plants must be a list of strings."),
    ),
    natural_key="model",
    external_id="model_number",
    tags="plants",
    tag_flags={"esslingen": "ESSLINGEN", "frankfurt": "FRANKFURT"},
    exact_filters=frozenset({
        "consumption",
        "car_type",
        "brand",
        "price",
        "discount",
        "available",
        "released",
        "model_number",
        "homepage",
    }),
)
