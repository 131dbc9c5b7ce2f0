"""Issue-tracker output: Jira ticket creation."""

from jira_reactor.jira.client import (
    DryRunTicketCreator,
    JiraAPIError,
    JiraTicketCreator,
    TicketCreator,
    build_ticket_creator,
    sanitize_summary,
)

__all__ = [
    "build_ticket_creator",
    "DryRunTicketCreator",
    "JiraAPIError",
    "JiraTicketCreator",
    "sanitize_summary",
    "TicketCreator",
]
