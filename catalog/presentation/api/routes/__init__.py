"""
API routes module.
"""

from .books import router as books_router
from .cars import router as cars_router

__all__ = [
    "books_router",
    "cars_router",
]
