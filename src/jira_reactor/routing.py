"""User email to Jira project routing table."""

import logging

logger = logging.getLogger(__name__)


def parse_user_project_pairs(raw: str, default_domain: str = "") -> dict[str, str]:
    """Parse ``user=PROJECT`` pairs into an email -> project key mapping.

    Pairs are comma separated, e.g. ``alice@example.com=OPS,bob=SYS``. Users
    without an ``@`` get ``@default_domain`` appended when a default domain is
    configured. Malformed pairs are logged and skipped.
    """
    table: dict[str, str] = {}
    domain = default_domain.strip().lstrip("@")

    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue

        parts = item.split("=")
        if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
            logger.error("Invalid user-jira pair: %s", item)
            continue

        user, project = parts[0].strip(), parts[1].strip()
        if "@" not in user and domain:
            user = f"{user}@{domain}"
        table[user] = project

    logger.info("Loaded %d user-jira route(s)", len(table))
    return table
