"""Async Slack client singleton and bot identity lookup.

One AsyncWebClient serves both the ingress side and the event processor.
``authenticate`` runs once at startup; its failure is fatal for the process.
"""

import asyncio
import logging

import aiohttp
from slack_sdk.web.async_client import AsyncWebClient

from jira_reactor.config import get_settings

logger = logging.getLogger(__name__)

_client: AsyncWebClient | None = None

# Transport-level failures raised by AsyncWebClient (network, timeouts)
SLACK_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


async def get_slack_client() -> AsyncWebClient:
    """Return a cached async Slack client built from slack_bot_token."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = AsyncWebClient(token=settings.slack_bot_token)
    return _client


async def authenticate(client: AsyncWebClient) -> str:
    """Run auth.test and return the bot's own user ID.

    Raises:
        SlackApiError: If the token is rejected. Not caught here: the caller
            must refuse to start serving.
    """
    response = await client.auth_test()
    user_id = response["user_id"]
    logger.info(
        "Authenticated to Slack team %s as %s (%s)",
        response.get("team", "?"),
        response.get("user", "?"),
        user_id,
    )
    return user_id


def reset_client() -> None:
    """Reset the cached client instance. Used for testing."""
    global _client
    _client = None
