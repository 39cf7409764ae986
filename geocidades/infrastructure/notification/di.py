"""DI provider for notification delivery."""

from typing import AsyncIterable, NewType

import httpx
from dishka import provide

from geocidades.config import Config
from geocidades.domain.notification.listener import NotifyAdministrator
from geocidades.domain.notification.port import Notifier
from geocidades.infrastructure.notification.log_notifier import LoggingNotifier
from geocidades.infrastructure.notification.webhook import WebhookNotifier
from geocidades.util.di.base import Provider
from geocidades.util.di.scope import Scope

# Disambiguate from any other httpx.AsyncClient in the container
NotificationHttpClient = NewType("NotificationHttpClient", httpx.AsyncClient)


class NotificationProvider(Provider):
    """Chooses the webhook notifier when a URL is configured, else the log."""

    @provide(scope=Scope.APP)
    async def get_notification_http_client(
        self, config: Config
    ) -> AsyncIterable[NotificationHttpClient]:
        async with httpx.AsyncClient(timeout=config.notification.timeout) as client:
            yield NotificationHttpClient(client)

    @provide(scope=Scope.APP)
    def get_notifier(self, config: Config, client: NotificationHttpClient) -> Notifier:
        if config.notification.webhook_url:
            return WebhookNotifier(url=config.notification.webhook_url, http_client=client)
        return LoggingNotifier()

    @provide(scope=Scope.APP)
    def get_notify_administrator(self, config: Config, notifier: Notifier) -> NotifyAdministrator:
        return NotifyAdministrator(
            notifier=notifier,
            admin_email=config.notification.admin_email or None,
        )
