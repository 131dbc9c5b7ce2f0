"""Ticket creation backends.

``TicketCreator`` is the narrow contract the event processor depends on. The
production implementation talks to the Jira REST API (v2) over httpx; the
dry-run implementation never touches the network.
"""

import itertools
import logging
from typing import Protocol

import httpx

from jira_reactor.config import Settings

logger = logging.getLogger(__name__)


class JiraAPIError(Exception):
    """Jira returned a non-success response or could not be reached.

    ``body`` holds the raw response text for diagnosis; it is logged, never
    shown to Slack users.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Jira API error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class TicketCreator(Protocol):
    """Anything that can file a ticket and return its identifier."""

    async def create_ticket(self, project: str, title: str, body: str) -> str: ...

    def browse_url(self, key: str) -> str: ...

    async def aclose(self) -> None: ...


def sanitize_summary(title: str) -> str:
    """Replace line breaks with spaces so the summary is a single line.

    Length is preserved: the caller has already truncated the title.
    """
    return title.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


class JiraTicketCreator:
    """Creates issues through ``POST /rest/api/2/issue`` with basic auth."""

    def __init__(
        self,
        base_url: str,
        username: str,
        api_token: str,
        *,
        issue_type: str = "Task",
        browse_base_url: str = "",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._issue_type = issue_type
        self._browse_base_url = (browse_base_url or base_url).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            auth=(username, api_token),
            timeout=httpx.Timeout(timeout_seconds),
            headers={"Accept": "application/json"},
            transport=transport,
        )

    async def create_ticket(self, project: str, title: str, body: str) -> str:
        """Create an issue in ``project`` and return its key (e.g. ``OPS-42``).

        Raises:
            JiraAPIError: On any non-2xx response or transport failure.
        """
        payload = {
            "fields": {
                "project": {"key": project},
                "summary": sanitize_summary(title),
                "description": body,
                "issuetype": {"name": self._issue_type},
            }
        }
        try:
            response = await self._client.post("/rest/api/2/issue", json=payload)
        except httpx.HTTPError as exc:
            raise JiraAPIError(0, str(exc)) from exc

        if not response.is_success:
            raise JiraAPIError(response.status_code, response.text)

        try:
            key = response.json().get("key")
        except ValueError as exc:
            raise JiraAPIError(response.status_code, response.text) from exc
        if not key:
            raise JiraAPIError(response.status_code, response.text)

        logger.info("Created Jira issue %s in project %s", key, project)
        return key

    def browse_url(self, key: str) -> str:
        return f"{self._browse_base_url}/browse/{key}"

    async def aclose(self) -> None:
        await self._client.aclose()


class DryRunTicketCreator:
    """Pretends to create tickets. Used to exercise the pipeline end to end."""

    def __init__(self, browse_base_url: str = "") -> None:
        self._browse_base_url = browse_base_url.rstrip("/")
        self._counter = itertools.count(1)

    async def create_ticket(self, project: str, title: str, body: str) -> str:
        key = f"{project}-DRYRUN-{next(self._counter)}"
        logger.info(
            "Dry run: would create Jira issue %s (summary=%r, %d chars of description)",
            key,
            sanitize_summary(title),
            len(body),
        )
        return key

    def browse_url(self, key: str) -> str:
        return f"{self._browse_base_url}/browse/{key}"

    async def aclose(self) -> None:
        return None


def build_ticket_creator(settings: Settings) -> TicketCreator:
    """Return the dry-run creator when ``jira_dry_run`` is set, else the Jira one."""
    if settings.jira_dry_run:
        logger.warning("Jira dry-run mode enabled; no tickets will be filed")
        return DryRunTicketCreator(browse_base_url=settings.browse_base_url)
    return JiraTicketCreator(
        settings.jira_url,
        settings.jira_username,
        settings.jira_api_token,
        issue_type=settings.jira_issue_type,
        browse_base_url=settings.browse_base_url,
        timeout_seconds=settings.jira_timeout_seconds,
    )
