"""Outbox: domain service for reliable event delivery."""

from geocidades.domain.shared.event import Event, EventId, EventRepository
from geocidades.domain.shared.service import Service


class Outbox(Service):
    """Transactional outbox.

    ``append`` writes the event through the unit of work's session, next to
    the change that raised it. Nothing is delivered at that point: the
    outbox worker claims committed events afterwards and hands them to the
    event bus.
    """

    _repo: EventRepository

    async def append(self, event: Event) -> None:
        await self._repo.save(event)

    async def claim(self, limit: int) -> list[Event]:
        return await self._repo.claim_pending(limit)

    async def mark_delivered(self, event_id: EventId) -> None:
        await self._repo.mark_delivered(event_id)

    async def mark_failed(self, event_id: EventId, error: str, max_retries: int) -> None:
        await self._repo.mark_failed(event_id, error, max_retries)
