"""Bounded FIFO hand-off between the webhook handler and the single worker.

A full queue blocks the producer (backpressure); events are never dropped.
Only one worker may consume: the processor's caches and its idempotency check
rely on events being handled strictly one at a time.
"""

import asyncio
import logging
from typing import Protocol

from jira_reactor.models import Outcome, ReactionEvent

logger = logging.getLogger(__name__)


class EventHandler(Protocol):
    async def handle(self, event: ReactionEvent) -> Outcome: ...


class EventQueue:
    """Ordered channel of ReactionEvent with a small fixed capacity."""

    def __init__(self, maxsize: int = 1) -> None:
        self._queue: asyncio.Queue[ReactionEvent] = asyncio.Queue(maxsize=max(1, maxsize))

    @property
    def maxsize(self) -> int:
        return self._queue.maxsize

    def qsize(self) -> int:
        return self._queue.qsize()

    async def put(self, event: ReactionEvent) -> None:
        """Enqueue an event, waiting while the queue is full."""
        if self._queue.full():
            logger.info("Event queue full (%d), waiting for the worker", self._queue.maxsize)
        await self._queue.put(event)

    async def get(self) -> ReactionEvent:
        return await self._queue.get()

    def task_done(self) -> None:
        self._queue.task_done()

    async def join(self) -> None:
        """Wait until every queued event has been handled."""
        await self._queue.join()


async def run_worker(queue: EventQueue, handler: EventHandler) -> None:
    """Consume events forever, one at a time, in arrival order.

    A failure while handling one event is logged and never stops the loop.
    Cancellation (on shutdown) propagates.
    """
    logger.info("Event worker started")
    while True:
        event = await queue.get()
        try:
            outcome = await handler.handle(event)
            logger.info(
                "Handled reaction on %s/%s: %s",
                event.item_channel,
                event.item_ts,
                outcome.value,
            )
        except Exception:
            logger.exception(
                "Unhandled error processing reaction on %s/%s",
                event.item_channel,
                event.item_ts,
            )
        finally:
            queue.task_done()
