"""Domain events and the event bus port."""

from abc import abstractmethod
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any, ClassVar, NewType, TypeVar
from uuid import UUID, uuid4

from pydantic import Field

from geocidades.domain.shared.model.entity import Entity
from geocidades.domain.shared.port import Port

EventId = NewType("EventId", UUID)

E = TypeVar("E", bound="Event")


def _utc_now() -> datetime:
    return datetime.now(UTC)


def new_event_id() -> EventId:
    return EventId(uuid4())


class Event(Entity):
    """Base class for domain events.

    Subclasses register by class name so the outbox can rebuild a stored
    event from its type name and JSON payload.
    """

    id: EventId = Field(default_factory=new_event_id)
    created_at: datetime = Field(default_factory=_utc_now)

    # Auto-populated registry of all Event subclasses
    _registry: ClassVar[dict[str, type["Event"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        cls._registry[cls.__name__] = cls

    @classmethod
    def lookup(cls, name: str) -> type["Event"]:
        """Return the Event subclass registered under ``name``.

        Raises:
            KeyError: no such event type.
        """
        return cls._registry[name]


EventHandlerFunc = Callable[[Event], Awaitable[None]]


class EventBus(Port):
    """Publishes domain events to in-process subscribers."""

    @abstractmethod
    def subscribe(self, event_type: type[Event], handler: EventHandlerFunc) -> None: ...

    @abstractmethod
    async def publish(self, event: Event) -> None: ...


class EventRepository(Port):
    """Durable event log backing the outbox.

    Events are written in the caller's unit of work, so an event exists only
    if the change that raised it was committed.
    """

    @abstractmethod
    async def save(self, event: Event) -> None:
        """Store an event as pending delivery."""
        ...

    @abstractmethod
    async def claim_pending(self, limit: int) -> list[Event]:
        """Return up to ``limit`` pending events, oldest first."""
        ...

    @abstractmethod
    async def mark_delivered(self, event_id: EventId) -> None: ...

    @abstractmethod
    async def mark_failed(self, event_id: EventId, error: str, max_retries: int) -> None:
        """Record a failed attempt.

        The event stays pending until it has failed ``max_retries`` times,
        then it is parked as failed.
        """
        ...
