"""Webhook notifier: POSTs notifications as JSON to a configured URL."""

import logging

import httpx

from geocidades.domain.notification.model import Notification
from geocidades.domain.notification.port import Notifier
from geocidades.domain.shared.error import InfrastructureError

logger = logging.getLogger(__name__)


class WebhookNotifier(Notifier):
    """Notifier implementation that delivers through an HTTP webhook."""

    def __init__(self, url: str, http_client: httpx.AsyncClient) -> None:
        self._url = url
        self._http = http_client

    async def send(self, notification: Notification) -> None:
        try:
            response = await self._http.post(
                self._url,
                json=notification.model_dump(),
                headers={"Accept": "application/json"},
            )
        except httpx.RequestError as e:
            raise InfrastructureError(
                f"Failed to reach notification webhook: {e}",
                code="notification_unavailable",
            ) from e

        if response.is_error:
            logger.error(
                "Notification webhook rejected message: status=%d, body=%s",
                response.status_code,
                response.text,
            )
            raise InfrastructureError(
                f"Notification webhook failed: {response.status_code}",
                code="notification_failed",
            )
        logger.info("Notification sent: kind=%s to=%s", notification.kind, notification.recipient)
