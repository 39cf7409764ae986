"""Turns user lifecycle events into administrator notifications."""

import logging
from dataclasses import dataclass

from geocidades.domain.auth.event import UserCreated, UserDeleted, UserUpdated
from geocidades.domain.notification.model import Notification
from geocidades.domain.notification.port import Notifier
from geocidades.domain.shared.error import InfrastructureError
from geocidades.domain.shared.event import Event, EventBus

logger = logging.getLogger(__name__)

_FOOTER = "Esta é uma notificação automática do sistema GeoCidades."


def render(event: Event, recipient: str | None = None) -> Notification | None:
    """Render the notification for a user event, or None for other events."""
    if isinstance(event, UserCreated):
        return Notification(
            kind="created",
            subject=f"Novo usuário criado: {event.full_name}",
            body=(
                "Um novo usuário foi criado no sistema GeoCidades.\n\n"
                f"Nome: {event.full_name}\nEmail: {event.email}\nPerfil: {event.role}\n\n"
                f"{_FOOTER}"
            ),
            recipient=recipient,
        )
    if isinstance(event, UserUpdated):
        return Notification(
            kind="updated",
            subject=f"Usuário atualizado: {event.full_name}",
            body=(
                "As informações de um usuário foram atualizadas no sistema GeoCidades.\n\n"
                f"Nome: {event.full_name}\nEmail: {event.email}\nPerfil: {event.role}\n"
                f"Alterações: {', '.join(event.changes)}\n\n"
                f"{_FOOTER}"
            ),
            recipient=recipient,
        )
    if isinstance(event, UserDeleted):
        return Notification(
            kind="deleted",
            subject=f"Usuário removido: {event.full_name}",
            body=(
                "Um usuário foi removido do sistema GeoCidades.\n\n"
                f"Nome: {event.full_name}\nEmail: {event.email}\n\n"
                f"{_FOOTER}"
            ),
            recipient=recipient,
        )
    return None


@dataclass
class NotifyAdministrator:
    """Sends a notification for every user created, updated or deleted.

    Delivery failures are logged and dropped: the user change has already
    happened and must not be undone by a notification outage.
    """

    notifier: Notifier
    admin_email: str | None = None

    def register(self, bus: EventBus) -> None:
        for event_type in (UserCreated, UserUpdated, UserDeleted):
            bus.subscribe(event_type, self.handle)

    async def handle(self, event: Event) -> None:
        notification = render(event, self.admin_email)
        if notification is None:
            return
        try:
            await self.notifier.send(notification)
        except InfrastructureError:
            logger.exception(
                "Failed to deliver %s notification for event %s",
                notification.kind,
                event.id,
            )
