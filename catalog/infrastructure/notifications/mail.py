"""
Mail notifications.

Sends "new resource" mails to the catalog administrator through an HTTP
mail relay that accepts JSON messages.
"""

import asyncio
from typing import Optional

import aiohttp
import structlog

from catalog.application.interfaces.notifications import NotificationSender
from catalog.config.settings import MailSettings, get_settings

logger = structlog.get_logger(__name__)


class MailNotificationSender(NotificationSender):
    """
    Posts mails to the configured relay.

    Delivery problems are logged and reported as ``False``; they never
    reach the caller as exceptions.
    """

    def __init__(
        self,
        settings: Optional[MailSettings] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self._settings = settings or get_settings().mail
        self._session = session
        self._owns_session = session is None

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        """Close the session if this sender created it."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        self._session = None

    async def send(self, subject: str, body: str) -> bool:
        """
        Send a mail to the administrator.

        Args:
            subject: Mail subject
            body: HTML body

        Returns:
            True if the relay accepted the mail
        """
        if not self._settings.relay_url:
            logger.info("Mail relay not configured, skipping", subject=subject)
            return False

        payload = {
            "from": self._settings.sender,
            "to": self._settings.recipient,
            "subject": subject,
            "html": body,
        }

        try:
            session = await self._get_session()
            async with session.post(
                self._settings.relay_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self._settings.timeout),
            ) as response:
                if response.status >= 400:
                    logger.warning(
                        "Mail relay rejected mail",
                        status=response.status,
                        subject=subject,
                    )
                    return False
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Error sending mail", subject=subject, error=str(e))
            return False

        logger.debug("Mail sent", subject=subject, recipient=self._settings.recipient)
        return True
