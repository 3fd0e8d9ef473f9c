"""
API schemas.

Pydantic models for responses. Request bodies are taken as plain JSON
objects and validated by the write service, so every violated rule is
reported with its own message.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from catalog.domain.entities import BookKind, Brand, CarType, Publisher


# =============================================================================
# Base schemas
# =============================================================================

class BaseResponse(BaseModel):
    """Base response with common fields."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    version: int


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str
    code: Optional[str] = None
    messages: Optional[List[str]] = None


# =============================================================================
# Book schemas
# =============================================================================

class BookResponse(BaseResponse):
    """Book response."""
    title: str
    rating: Optional[float] = None
    kind: Optional[BookKind] = None
    publisher: Optional[Publisher] = None
    price: Optional[float] = None
    discount: Optional[float] = None
    available: Optional[bool] = None
    published: Optional[date] = None
    isbn: Optional[str] = None
    homepage: Optional[str] = None
    keywords: List[str] = []


# =============================================================================
# Car schemas
# =============================================================================

class CarResponse(BaseResponse):
    """Car response."""
    model: str
    consumption: Optional[float] = None
    car_type: Optional[CarType] = None
    brand: Optional[Brand] = None
    price: Optional[float] = None
    discount: Optional[float] = None
    available: Optional[bool] = None
    released: Optional[date] = None
    model_number: Optional[str] = None
    homepage: Optional[str] = None
    plants: List[str] = []
