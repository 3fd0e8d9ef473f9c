"""
Cars API routes.
"""

from ..dependencies import get_car_read_service, get_car_write_service
from ..schemas import CarResponse
from .resources import build_resource_router

router = build_resource_router(
    name="Car",
    response_model=CarResponse,
    get_read_service=get_car_read_service,
    get_write_service=get_car_write_service,
)
