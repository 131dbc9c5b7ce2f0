"""FastAPI application with lifespan, health endpoint and the event worker."""

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from jira_reactor.config import get_settings
from jira_reactor.event_queue import EventQueue, run_worker
from jira_reactor.jira import build_ticket_creator
from jira_reactor.logging_config import configure_logging
from jira_reactor.processor import EventProcessor
from jira_reactor.routing import parse_user_project_pairs
from jira_reactor.slack.client import authenticate, get_slack_client
from jira_reactor.slack.router import router as slack_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: wire the pipeline and run one worker.

    A failed Slack auth.test propagates and stops startup: the server never
    begins serving with a token it cannot use.
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    slack_client = await get_slack_client()
    bot_user_id = await authenticate(slack_client)

    routing_table = parse_user_project_pairs(
        settings.user_jira_pairs, settings.default_email_domain
    )
    ticket_creator = build_ticket_creator(settings)
    processor = EventProcessor(
        slack_client,
        ticket_creator,
        routing_table,
        bot_user_id,
        settings,
    )
    queue = EventQueue(maxsize=settings.event_queue_size)

    app.state.settings = settings
    app.state.bot_user_id = bot_user_id
    app.state.event_queue = queue
    app.state.processor = processor

    worker = asyncio.create_task(run_worker(queue, processor), name="event-worker")
    try:
        yield
    finally:
        worker.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await worker
        await ticket_creator.aclose()
        logger.info("Event worker stopped")


app = FastAPI(
    title="Jira Reactor",
    lifespan=lifespan,
)
app.include_router(slack_router)


@app.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    """Liveness probe. Does not touch Slack, Jira or the queue."""
    return "ok"
