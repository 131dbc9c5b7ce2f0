"""Data models for the reaction-to-ticket pipeline."""

from jira_reactor.models.slack import MessageRecord, Reaction, ReactionEvent, UserProfile
from jira_reactor.models.ticket import Outcome, TicketResult

__all__ = [
    "MessageRecord",
    "Outcome",
    "Reaction",
    "ReactionEvent",
    "TicketResult",
    "UserProfile",
]
