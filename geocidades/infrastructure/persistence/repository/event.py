"""SQLAlchemy adapter implementing EventRepository."""

import logging
from datetime import UTC, datetime

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from geocidades.domain.shared.event import Event, EventId, EventRepository
from geocidades.infrastructure.persistence.tables import events_table

logger = logging.getLogger(__name__)


class SqlEventRepository(EventRepository):
    """SQLAlchemy-backed outbox. One row per event, carrying its delivery status."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def save(self, event: Event) -> None:
        stmt = insert(events_table).values(
            id=str(event.id),
            event_type=type(event).__name__,
            payload=event.model_dump(mode="json"),
            created_at=event.created_at,
            status="pending",
            retry_count=0,
        )
        await self._session.execute(stmt)
        await self._session.flush()

    async def claim_pending(self, limit: int) -> list[Event]:
        # SKIP LOCKED lets concurrent workers take disjoint batches (no-op on SQLite)
        stmt = (
            select(events_table.c.event_type, events_table.c.payload)
            .where(events_table.c.status == "pending")
            .order_by(events_table.c.created_at)
            .limit(limit)
            .with_for_update(skip_locked=True)
        )
        result = await self._session.execute(stmt)

        events: list[Event] = []
        for row in result.mappings().all():
            try:
                event_cls = Event.lookup(row["event_type"])
            except KeyError:
                logger.error("Unknown event type in outbox: %s", row["event_type"])
                continue
            events.append(event_cls.model_validate(row["payload"]))
        return events

    async def mark_delivered(self, event_id: EventId) -> None:
        stmt = (
            update(events_table)
            .where(events_table.c.id == str(event_id))
            .values(status="delivered", delivery_error=None, delivered_at=datetime.now(UTC))
        )
        await self._session.execute(stmt)
        await self._session.flush()

    async def mark_failed(self, event_id: EventId, error: str, max_retries: int) -> None:
        select_stmt = select(events_table.c.retry_count).where(
            events_table.c.id == str(event_id)
        )
        row = (await self._session.execute(select_stmt)).first()
        if row is None:
            logger.warning("Event %s not found for mark_failed", event_id)
            return

        retry_count = row[0] + 1
        values: dict = {"retry_count": retry_count, "delivery_error": error}
        if retry_count >= max_retries:
            values["status"] = "failed"

        stmt = update(events_table).where(events_table.c.id == str(event_id)).values(**values)
        await self._session.execute(stmt)
        await self._session.flush()
