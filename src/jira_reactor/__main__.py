"""Run the service: ``python -m jira_reactor``."""

import uvicorn

from jira_reactor.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "jira_reactor.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
