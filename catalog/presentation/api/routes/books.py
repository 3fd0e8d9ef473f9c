"""
Books API routes.
"""

from ..dependencies import get_book_read_service, get_book_write_service
from ..schemas import BookResponse
from .resources import build_resource_router

router = build_resource_router(
    name="Book",
    response_model=BookResponse,
    get_read_service=get_book_read_service,
    get_write_service=get_book_write_service,
)
