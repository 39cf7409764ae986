"""Notifier that only writes notifications to the log."""

import logging

from geocidades.domain.notification.model import Notification
from geocidades.domain.notification.port import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """Used when no webhook is configured."""

    async def send(self, notification: Notification) -> None:
        logger.info(
            "Notification (%s) to %s: %s",
            notification.kind,
            notification.recipient or "<no recipient>",
            notification.subject,
        )
