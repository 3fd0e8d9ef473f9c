"""Notification infrastructure."""

from .mail import MailNotificationSender

__all__ = ["MailNotificationSender"]
