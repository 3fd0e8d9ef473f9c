"""
Car repository implementation.
"""

from typing import Optional

from catalog.domain.entities import CAR_SCHEMA, Car
from catalog.infrastructure.database.mappers import (
    car_entity_to_model,
    car_model_to_entity,
)
from catalog.infrastructure.database.models import CarModel

from .base import BaseRepository


class SqlAlchemyCarRepository(BaseRepository[CarModel, Car]):
    """SQLAlchemy implementation of the car repository."""

    model_class = CarModel
    schema = CAR_SCHEMA

    def _to_entity(self, model: CarModel) -> Car:
        return car_model_to_entity(model)

    def _to_model(self, entity: Car, model: Optional[CarModel] = None) -> CarModel:
        return car_entity_to_model(entity, model)
