"""Tests for the bounded event queue and the single worker loop."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from jira_reactor.event_queue import EventQueue, run_worker
from jira_reactor.models import Outcome, ReactionEvent


def _event(ts: str) -> ReactionEvent:
    return ReactionEvent(
        user_id="U1",
        reaction="create-ticket",
        item_channel="C1",
        item_ts=ts,
        item_type="message",
    )


def test_capacity_at_least_one():
    assert EventQueue(maxsize=0).maxsize == 1
    assert EventQueue(maxsize=3).maxsize == 3


async def test_fifo_order():
    queue = EventQueue(maxsize=3)
    for ts in ("1.1", "2.2", "3.3"):
        await queue.put(_event(ts))

    assert [(await queue.get()).item_ts for _ in range(3)] == ["1.1", "2.2", "3.3"]


async def test_put_blocks_when_full():
    """A full queue applies backpressure instead of dropping events."""
    queue = EventQueue(maxsize=1)
    await queue.put(_event("1.1"))

    blocked = asyncio.create_task(queue.put(_event("2.2")))
    await asyncio.sleep(0.01)
    assert not blocked.done()

    assert (await queue.get()).item_ts == "1.1"
    await asyncio.wait_for(blocked, timeout=1)
    assert queue.qsize() == 1


async def test_worker_processes_serially_in_order():
    queue = EventQueue(maxsize=5)
    seen: list[str] = []
    handler = AsyncMock()

    async def _handle(event: ReactionEvent) -> Outcome:
        seen.append(event.item_ts)
        return Outcome.COMPLETED

    handler.handle.side_effect = _handle
    worker = asyncio.create_task(run_worker(queue, handler))
    for ts in ("1.1", "2.2", "3.3"):
        await queue.put(_event(ts))

    await asyncio.wait_for(queue.join(), timeout=1)
    worker.cancel()
    with pytest.raises(asyncio.CancelledError):
        await worker

    assert seen == ["1.1", "2.2", "3.3"]


async def test_worker_survives_handler_exception():
    """One failing event never stops later events from being handled."""
    queue = EventQueue(maxsize=5)
    handler = AsyncMock()
    handler.handle.side_effect = [RuntimeError("boom"), Outcome.COMPLETED]

    worker = asyncio.create_task(run_worker(queue, handler))
    await queue.put(_event("1.1"))
    await queue.put(_event("2.2"))

    await asyncio.wait_for(queue.join(), timeout=1)
    worker.cancel()
    with pytest.raises(asyncio.CancelledError):
        await worker

    assert handler.handle.await_count == 2
