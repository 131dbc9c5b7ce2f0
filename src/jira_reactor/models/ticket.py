"""Ticket pipeline result types."""

from enum import Enum

from pydantic import BaseModel


class Outcome(str, Enum):
    """How the handling of a single reaction event ended."""

    COMPLETED = "completed"  # Ticket filed, completed marker applied
    SKIPPED = "skipped"  # Completed marker already present
    FAILED = "failed"


class TicketResult(BaseModel):
    """Returned after successful ticket creation."""

    key: str  # e.g., "OPS-123"
    url: str  # Browse URL shown in Slack
