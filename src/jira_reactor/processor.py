"""Per-event ticket pipeline.

Turns one ReactionEvent into (at most) one Jira ticket:
enter-pending -> resolve user -> routing -> fetch message -> idempotency check
-> thread target -> permalink -> create ticket -> report -> exit-pending.

Only the working/error/completed reactions and replies talk back to Slack;
they are best-effort and never abort a stage. Every other failure is terminal
for the current event only.
"""

import logging

from cachetools import TTLCache
from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from jira_reactor.config import Settings
from jira_reactor.errors import (
    MessageFetchError,
    PermalinkError,
    TicketCreationError,
    TicketPipelineError,
    UnroutedUserError,
    UserLookupError,
)
from jira_reactor.jira import JiraAPIError, TicketCreator
from jira_reactor.models import MessageRecord, Outcome, ReactionEvent, TicketResult, UserProfile
from jira_reactor.slack.client import SLACK_TRANSPORT_ERRORS
from jira_reactor.slack.notifier import (
    add_reaction,
    post_ephemeral_reply,
    post_thread_reply,
    remove_reaction,
)

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 100
_MESSAGE_CACHE_SIZE = 256


def build_ticket_title(text: str) -> str:
    """First line of ``text``, hard-truncated to 100 characters."""
    first = text.split("\n", 1)[0]
    return first.replace("\r", "")[:TITLE_MAX_LENGTH]


def build_ticket_body(permalink: str, text: str) -> str:
    return f"From slack: {permalink}\n\n{text}"


class EventProcessor:
    """Consumer side of the event queue.

    Owns the user profile memo and the short-lived message cache. Must be
    driven by a single worker: the idempotency check is only race-free when
    events are handled one at a time.
    """

    def __init__(
        self,
        slack_client: AsyncWebClient,
        ticket_creator: TicketCreator,
        routing_table: dict[str, str],
        bot_user_id: str,
        settings: Settings,
        message_cache: TTLCache | None = None,
    ) -> None:
        self.slack = slack_client
        self.tickets = ticket_creator
        self.routing_table = dict(routing_table)
        self.bot_user_id = bot_user_id
        self.settings = settings
        self.users: dict[str, UserProfile] = {}
        self.messages: TTLCache = (
            message_cache
            if message_cache is not None
            else TTLCache(maxsize=_MESSAGE_CACHE_SIZE, ttl=settings.message_cache_ttl)
        )

    async def handle(self, event: ReactionEvent) -> Outcome:
        """Run the full pipeline for one event and return how it ended.

        The working reaction is removed on every exit path.
        """
        channel, ts = event.item_channel, event.item_ts

        self.messages.pop((channel, ts), None)
        await remove_reaction(self.slack, channel, ts, self.settings.error_emoji)
        await add_reaction(self.slack, channel, ts, self.settings.working_emoji)
        try:
            return await self._process(event)
        finally:
            await remove_reaction(self.slack, channel, ts, self.settings.working_emoji)

    async def _process(self, event: ReactionEvent) -> Outcome:
        try:
            filed = await self._file_ticket(event)
        except TicketPipelineError as exc:
            logger.error(
                "Ticket pipeline failed for %s/%s: %s (%s)",
                event.item_channel,
                event.item_ts,
                exc,
                type(exc).__name__,
            )
            await self._report_failure(event, exc)
            return Outcome.FAILED

        if filed is None:
            logger.info(
                "Ticket already filed for %s/%s, skipping", event.item_channel, event.item_ts
            )
            return Outcome.SKIPPED

        result, thread_ts = filed
        await post_thread_reply(
            self.slack,
            event.item_channel,
            thread_ts,
            f"I've created your Jira ticket {result.key}: {result.url}",
        )
        await add_reaction(
            self.slack, event.item_channel, event.item_ts, self.settings.completed_emoji
        )
        return Outcome.COMPLETED

    async def _file_ticket(self, event: ReactionEvent) -> tuple[TicketResult, str] | None:
        """Resolve, check and create. Returns the ticket and the thread to reply in,
        or None when the completed marker is already present.
        """
        user = await self.resolve_user(event.user_id)
        logger.debug("Got actionable reaction %s from user %s", event.reaction, user.email)

        project = self.routing_table.get(user.email)
        if project is None:
            message = f"Email {user.email} is not configured in USER_JIRA_PAIRS"
            raise UnroutedUserError(message, user_message=message)

        logger.debug("Need to create a ticket in %s", project)
        message = await self.fetch_message(event.item_channel, event.item_ts)

        # Must stay ahead of any ticket side effect
        if message.has_reaction_from(self.settings.completed_emoji, self.bot_user_id):
            return None

        thread_ts = message.reply_target
        permalink = await self.fetch_permalink(message)

        title = build_ticket_title(message.text)
        body = build_ticket_body(permalink, message.text)
        try:
            key = await self.tickets.create_ticket(project, title, body)
        except JiraAPIError as exc:
            raise TicketCreationError(
                f"Creating Jira ticket in {project}: {exc}",
                user_message="There was an error creating the Jira ticket.",
            ) from exc

        return TicketResult(key=key, url=self.tickets.browse_url(key)), thread_ts

    async def resolve_user(self, user_id: str) -> UserProfile:
        """Return the memoized profile for ``user_id``, fetching it on first use."""
        profile = self.users.get(user_id)
        if profile is None:
            try:
                response = await self.slack.users_info(user=user_id)
            except (SlackApiError, *SLACK_TRANSPORT_ERRORS) as exc:
                raise UserLookupError(f"Get user info for {user_id}: {exc}") from exc
            email = response["user"].get("profile", {}).get("email", "")
            profile = UserProfile(user_id=user_id, email=email)
            self.users[user_id] = profile

        if not profile.email:
            raise UserLookupError(
                f"Unable to get user profile email from {user_id}",
                user_message="Unable to get user info",
            )
        return profile

    async def fetch_message(self, channel: str, ts: str) -> MessageRecord:
        """Return the message at (channel, ts), served from the TTL cache when fresh.

        conversations.history only holds top-level messages (and broadcast
        replies); a thread reply is looked up with conversations.replies.
        """
        key = (channel, ts)
        cached = self.messages.get(key)
        if cached is not None:
            return cached

        found = await self._query_message(
            self.slack.conversations_history, channel, ts, latest=ts, limit=1, inclusive=True
        )
        if found is None:
            found = await self._query_message(
                self.slack.conversations_replies,
                channel,
                ts,
                ts=ts,
                latest=ts,
                limit=1,
                inclusive=True,
            )
        if found is None:
            raise MessageFetchError(f"Message {ts} not found in {channel}")

        record = MessageRecord.from_slack(channel, found)
        logger.debug("Caching message %s/%s", channel, ts)
        self.messages[key] = record
        return record

    async def _query_message(self, method, channel: str, ts: str, /, **params: object) -> dict | None:
        """Call a Slack history method and return the message whose ts is ``ts``."""
        try:
            response = await method(channel=channel, **params)
        except (SlackApiError, *SLACK_TRANSPORT_ERRORS) as exc:
            raise MessageFetchError(f"Failed to get message {channel}/{ts}: {exc}") from exc

        for message in response.get("messages") or []:
            if message.get("ts") == ts:
                return message
        return None

    async def fetch_permalink(self, message: MessageRecord) -> str:
        try:
            response = await self.slack.chat_getPermalink(
                channel=message.channel, message_ts=message.ts
            )
        except (SlackApiError, *SLACK_TRANSPORT_ERRORS) as exc:
            raise PermalinkError(
                f"Failed to get permalink for {message.channel}/{message.ts}: {exc}"
            ) from exc
        return response["permalink"]

    async def reply_target(self, channel: str, ts: str) -> str:
        """Thread root to reply under; falls back to ``ts`` if the message is unavailable."""
        try:
            message = await self.fetch_message(channel, ts)
        except MessageFetchError:
            logger.warning("Could not resolve thread for %s/%s, replying to message", channel, ts)
            return ts
        return message.reply_target

    async def _report_failure(self, event: ReactionEvent, exc: TicketPipelineError) -> None:
        channel, ts = event.item_channel, event.item_ts
        await add_reaction(self.slack, channel, ts, self.settings.error_emoji)
        if exc.user_message:
            thread_ts = await self.reply_target(channel, ts)
            await post_ephemeral_reply(self.slack, channel, thread_ts, event.user_id, exc.user_message)
