"""In-process event bus."""

import asyncio
import logging
from collections import defaultdict

from geocidades.domain.shared.event import Event, EventBus, EventHandlerFunc

logger = logging.getLogger(__name__)


class InMemoryEventBus(EventBus):
    """Dispatches each published event to the handlers subscribed to its type.

    Handlers for one event run concurrently. A handler that raises fails the
    publish call; handlers that must not interrupt the caller catch their own
    errors.
    """

    def __init__(self) -> None:
        self._subscribers: defaultdict[type[Event], list[EventHandlerFunc]] = defaultdict(list)

    def subscribe(self, event_type: type[Event], handler: EventHandlerFunc) -> None:
        self._subscribers[event_type].append(handler)
        logger.debug("Subscribed %r to %s", handler, event_type.__name__)

    async def publish(self, event: Event) -> None:
        handlers = self._subscribers.get(type(event), [])
        if not handlers:
            logger.debug("No subscribers for %s", type(event).__name__)
            return
        logger.debug("Publishing %s to %d handler(s)", type(event).__name__, len(handlers))
        await asyncio.gather(*(handler(event) for handler in handlers))
