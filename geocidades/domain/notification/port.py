"""Notifier port."""

from abc import abstractmethod
from typing import Protocol

from geocidades.domain.notification.model import Notification
from geocidades.domain.shared.port import Port


class Notifier(Port, Protocol):
    """Delivers notifications. Raises InfrastructureError when delivery fails."""

    @abstractmethod
    async def send(self, notification: Notification) -> None: ...
