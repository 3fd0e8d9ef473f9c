"""Notification sender interface."""

from abc import ABC, abstractmethod


class NotificationSender(ABC):
    """Delivers short notifications (mail-like) to administrators."""

    @abstractmethod
    async def send(self, subject: str, body: str) -> bool:
        """Send a notification. Returns True if it was delivered."""
        pass
