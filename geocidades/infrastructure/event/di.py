"""Dependency injection provider for the event system."""

from dishka import provide

from geocidades.domain.notification.listener import NotifyAdministrator
from geocidades.domain.shared.event import EventBus, EventRepository
from geocidades.domain.shared.outbox import Outbox
from geocidades.infrastructure.event.memory_bus import InMemoryEventBus
from geocidades.util.di.base import Provider
from geocidades.util.di.scope import Scope


class EventProvider(Provider):
    """Provides event system components.

    The Outbox is UOW-scoped so events are written in the request's
    transaction. The bus the outbox worker publishes to is an APP-scoped
    singleton with its listeners registered.
    """

    @provide(scope=Scope.UOW)
    def get_outbox(self, repo: EventRepository) -> Outbox:
        return Outbox(_repo=repo)

    @provide(scope=Scope.APP)
    def get_event_bus(self, notify_admin: NotifyAdministrator) -> EventBus:
        bus = InMemoryEventBus()
        notify_admin.register(bus)
        return bus
