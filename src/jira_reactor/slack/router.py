"""Slack webhook router with request verification."""

from fastapi import APIRouter, Depends, Request, Response

from jira_reactor.event_queue import EventQueue
from jira_reactor.slack.handlers import handle_slack_event
from jira_reactor.slack.verification import verify_slack_request

router = APIRouter(prefix="", tags=["slack"])


def get_event_queue(request: Request) -> EventQueue:
    """The queue created in the application lifespan."""
    return request.app.state.event_queue


def get_bot_user_id(request: Request) -> str:
    """The bot's own user ID, resolved by auth.test at startup."""
    return request.app.state.bot_user_id


@router.post("/slack/events")
async def slack_events(
    payload: dict = Depends(verify_slack_request),
    queue: EventQueue = Depends(get_event_queue),
    bot_user_id: str = Depends(get_bot_user_id),
) -> Response:
    """Receive Slack webhook events.

    Retried deliveries (X-Slack-Retry-Num) are handled like first deliveries;
    the processor's idempotency check absorbs the duplicates.
    """
    return await handle_slack_event(payload, queue, bot_user_id)
