"""Slack event dispatch and reaction filtering logic."""

import logging

from fastapi import Response
from fastapi.responses import PlainTextResponse

from jira_reactor.config import get_settings
from jira_reactor.event_queue import EventQueue
from jira_reactor.models import ReactionEvent

logger = logging.getLogger(__name__)


async def handle_slack_event(payload: dict, queue: EventQueue, bot_user_id: str) -> Response:
    """Dispatch a Slack event based on its type.

    - url_verification: echo the challenge token as plain text
    - event_callback: filter the contained event, enqueue if actionable
    - anything else: acknowledge with an empty 200
    """
    event_type = payload.get("type")

    if event_type == "url_verification":
        return PlainTextResponse(str(payload.get("challenge", "")))

    if event_type == "event_callback":
        event = payload.get("event") or {}
        await handle_reaction_event(event, queue, bot_user_id)
        return Response(status_code=200)

    logger.info("Received unexpected slack event type: %s", event_type)
    return Response(status_code=200)


async def handle_reaction_event(event: dict, queue: EventQueue, bot_user_id: str) -> bool:
    """Apply reaction filters and enqueue the event. Returns True if enqueued.

    Filters, in order:
    1. Not a reaction_added event -> skip
    2. Reaction by the bot itself -> skip
    3. Item is not a message -> skip
    4. Reaction is not the trigger emoji -> skip
    """
    settings = get_settings()

    # Filter 1: Not a reaction_added event
    if event.get("type") != "reaction_added":
        logger.info("Received unexpected inner event: %s", event.get("type"))
        return False

    reaction = ReactionEvent.from_slack(event)

    # Filter 2: Our own reactions (status emoji)
    if reaction.user_id == bot_user_id:
        logger.debug("Ignoring reaction %s from myself", reaction.reaction)
        return False

    logger.debug(
        "Received reaction, channel: %s, reaction: %s, user: %s, item type: %s",
        reaction.item_channel,
        reaction.reaction,
        reaction.user_id,
        reaction.item_type,
    )

    # Filters 3 and 4: only the trigger emoji on a message
    if reaction.item_type != "message" or reaction.reaction != settings.trigger_emoji:
        logger.debug("Ignore reaction %s and type %s", reaction.reaction, reaction.item_type)
        return False

    logger.info(
        "Queueing ticket request from user %s for message %s/%s",
        reaction.user_id,
        reaction.item_channel,
        reaction.item_ts,
    )
    await queue.put(reaction)
    return True
