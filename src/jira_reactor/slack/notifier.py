"""Slack status signaling: reactions, thread replies and ephemeral replies.

All functions are fire-and-forget: they catch and log SlackApiError and
transport failures but never raise, so a failed status update cannot abort
ticket handling.
"""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from jira_reactor.slack.client import SLACK_TRANSPORT_ERRORS

logger = logging.getLogger(__name__)

# Error codes that mean "nothing to do" rather than a real failure
_BENIGN_REACTION_ERRORS = (
    "already_reacted",
    "no_reaction",
    "missing_scope",
    "no_item_specified",
    "message_not_found",
)

_REPLY_ERRORS = (SlackApiError, *SLACK_TRANSPORT_ERRORS)


def _error_code(exc: SlackApiError) -> str:
    return exc.response.get("error", "") if exc.response else ""


async def add_reaction(client: AsyncWebClient, channel_id: str, timestamp: str, emoji: str) -> bool:
    """Add an emoji reaction to a message. Returns True on success.

    Args:
        client: Slack client to call with.
        channel_id: Slack channel ID.
        timestamp: Message timestamp.
        emoji: Emoji name without colons (e.g., "hourglass_flowing_sand").
    """
    try:
        await client.reactions_add(channel=channel_id, name=emoji, timestamp=timestamp)
        return True
    except SlackApiError as exc:
        _log_reaction_failure("add", emoji, timestamp, exc)
        return False
    except SLACK_TRANSPORT_ERRORS:
        logger.error(
            "Transport error trying to add reaction '%s' on %s", emoji, timestamp, exc_info=True
        )
        return False


async def remove_reaction(client: AsyncWebClient, channel_id: str, timestamp: str, emoji: str) -> bool:
    """Remove the bot's own emoji reaction from a message. Returns True on success."""
    try:
        await client.reactions_remove(channel=channel_id, name=emoji, timestamp=timestamp)
        return True
    except SlackApiError as exc:
        _log_reaction_failure("remove", emoji, timestamp, exc)
        return False
    except SLACK_TRANSPORT_ERRORS:
        logger.error(
            "Transport error trying to remove reaction '%s' on %s", emoji, timestamp, exc_info=True
        )
        return False


def _log_reaction_failure(action: str, emoji: str, timestamp: str, exc: SlackApiError) -> None:
    error_code = _error_code(exc)
    if error_code in _BENIGN_REACTION_ERRORS:
        logger.warning("Skipped %s of reaction '%s' (%s): %s", action, emoji, error_code, timestamp)
    else:
        logger.error(
            "Failed to %s reaction '%s' on %s: %s",
            action,
            emoji,
            timestamp,
            error_code,
            exc_info=True,
        )


async def post_thread_reply(client: AsyncWebClient, channel_id: str, thread_ts: str, text: str) -> bool:
    """Post a public reply in the thread rooted at ``thread_ts``."""
    try:
        await client.chat_postMessage(channel=channel_id, thread_ts=thread_ts, text=text)
        return True
    except _REPLY_ERRORS:
        logger.warning("Failed to post thread reply in %s/%s", channel_id, thread_ts, exc_info=True)
        return False


async def post_ephemeral_reply(
    client: AsyncWebClient, channel_id: str, thread_ts: str, user_id: str, text: str
) -> bool:
    """Post a reply in the thread that only ``user_id`` can see."""
    try:
        await client.chat_postEphemeral(
            channel=channel_id,
            user=user_id,
            thread_ts=thread_ts,
            text=text,
        )
        return True
    except _REPLY_ERRORS:
        logger.warning(
            "Failed to post ephemeral reply to %s in %s/%s",
            user_id,
            channel_id,
            thread_ts,
            exc_info=True,
        )
        return False
