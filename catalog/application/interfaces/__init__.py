"""
Application interfaces.

Abstract contracts implemented by the infrastructure layer.
"""

from .notifications import NotificationSender
from .repository import ResourceQuery, ResourceRepository

__all__ = [
    "NotificationSender",
    "ResourceQuery",
    "ResourceRepository",
]
