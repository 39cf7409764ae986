"""Outbox worker: delivers committed events to in-process listeners."""

import asyncio
import logging

from dishka import AsyncContainer

from geocidades.config import EventsConfig
from geocidades.domain.shared.event import EventBus
from geocidades.domain.shared.outbox import Outbox
from geocidades.util.di.scope import Scope

logger = logging.getLogger(__name__)


async def deliver_pending(
    outbox: Outbox,
    bus: EventBus,
    *,
    limit: int,
    max_retries: int,
) -> int:
    """Claim up to ``limit`` pending events and publish each one on ``bus``.

    Each event is marked delivered or failed on its own, so one failing
    listener does not hold back the rest of the batch.

    Returns:
        Number of events claimed.
    """
    events = await outbox.claim(limit)
    for event in events:
        try:
            await bus.publish(event)
        except Exception as e:
            logger.error("Delivery of %s %s failed: %s", type(event).__name__, event.id, e)
            await outbox.mark_failed(event.id, str(e), max_retries=max_retries)
        else:
            await outbox.mark_delivered(event.id)
    return len(events)


class OutboxWorker:
    """Polls the outbox and publishes committed events.

    Every poll runs in its own unit of work: claiming, publishing and the
    status updates commit together when the scope closes.

    Example:
        worker = OutboxWorker(container, config.events)
        worker.start()
        ...
        await worker.stop()
    """

    def __init__(self, container: AsyncContainer, config: EventsConfig) -> None:
        self._container = container
        self._config = config
        self._shutdown = False
        self._task: asyncio.Task | None = None

    def start(self) -> asyncio.Task:
        """Start the worker in a background task."""
        self._shutdown = False
        self._task = asyncio.create_task(self._run(), name="outbox-worker")
        logger.info("Outbox worker started")
        return self._task

    async def stop(self) -> None:
        """Stop polling and wait for the current batch to finish."""
        self._shutdown = True
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _run(self) -> None:
        try:
            while not self._shutdown:
                try:
                    claimed = await self.poll_once()
                except Exception:
                    logger.exception("Outbox poll failed")
                    claimed = 0
                if not claimed:
                    await asyncio.sleep(self._config.poll_interval)
        except asyncio.CancelledError:
            logger.info("Outbox worker cancelled")
            raise
        finally:
            logger.info("Outbox worker stopped")

    async def poll_once(self) -> int:
        """Deliver one batch. Returns the number of events claimed."""
        async with self._container(scope=Scope.UOW) as scope:
            outbox = await scope.get(Outbox)
            bus = await scope.get(EventBus)
            return await deliver_pending(
                outbox,
                bus,
                limit=self._config.batch_size,
                max_retries=self._config.max_retries,
            )
