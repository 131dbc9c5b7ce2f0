"""Error kinds raised by the ticket pipeline.

Each error may carry a ``user_message``: text that is safe to show in Slack.
Errors without one surface only as the error status reaction.
"""


class TicketPipelineError(Exception):
    """Base class for terminal failures while handling a reaction event."""

    def __init__(self, message: str, user_message: str | None = None) -> None:
        super().__init__(message)
        self.user_message = user_message


class UserLookupError(TicketPipelineError):
    """The reacting user's profile could not be fetched or has no email."""


class UnroutedUserError(TicketPipelineError):
    """The reacting user's email has no entry in the routing table."""


class MessageFetchError(TicketPipelineError):
    """The reacted-to message could not be retrieved."""


class PermalinkError(TicketPipelineError):
    """Slack refused to produce a permalink for the message."""


class TicketCreationError(TicketPipelineError):
    """The issue tracker rejected or failed the ticket creation call."""
