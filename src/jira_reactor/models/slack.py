"""Slack-side models: reaction events, user profiles and fetched messages."""

from pydantic import BaseModel, ConfigDict


class ReactionEvent(BaseModel):
    """A reaction_added event reduced to the fields the pipeline needs."""

    model_config = ConfigDict(frozen=True)

    user_id: str  # Reacting user
    reaction: str  # Emoji name without colons
    item_channel: str
    item_ts: str  # ts of the reacted-to message, e.g., "1234567890.123456"
    item_type: str  # "message", "file", "file_comment"

    @classmethod
    def from_slack(cls, event: dict) -> "ReactionEvent":
        """Build from a raw Slack ``reaction_added`` event payload."""
        item = event.get("item", {})
        return cls(
            user_id=event.get("user", ""),
            reaction=event.get("reaction", ""),
            item_channel=item.get("channel", ""),
            item_ts=item.get("ts", ""),
            item_type=item.get("type", ""),
        )


class UserProfile(BaseModel):
    """The subset of a Slack user we route on."""

    user_id: str
    email: str = ""


class Reaction(BaseModel):
    """An emoji reaction already present on a message."""

    name: str
    users: list[str] = []
    count: int = 0


class MessageRecord(BaseModel):
    """A Slack message identified by (channel, ts)."""

    channel: str
    ts: str
    thread_ts: str | None = None  # Root ts when the message lives in a thread
    text: str = ""
    reactions: list[Reaction] = []

    @classmethod
    def from_slack(cls, channel: str, message: dict) -> "MessageRecord":
        """Build from a message object returned by conversations.history."""
        return cls(
            channel=channel,
            ts=message.get("ts", ""),
            thread_ts=message.get("thread_ts") or None,
            text=message.get("text", ""),
            reactions=[Reaction(**r) for r in message.get("reactions", [])],
        )

    @property
    def reply_target(self) -> str:
        """Timestamp to reply under: the thread root, or the message itself."""
        return self.thread_ts or self.ts

    def has_reaction_from(self, name: str, user_id: str) -> bool:
        """Return True if ``user_id`` has reacted to this message with ``name``."""
        return any(r.name == name and user_id in r.users for r in self.reactions)
