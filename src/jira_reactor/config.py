"""Application configuration via pydantic-settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Slack
    slack_bot_token: str = ""
    slack_signing_secret: str = ""
    slack_verification_token: str = ""

    # Emoji names (without colons)
    trigger_emoji: str = "create-jira-ticket"
    completed_emoji: str = "+1"
    working_emoji: str = "hourglass_flowing_sand"
    error_emoji: str = "x"

    # Routing: "alice@example.com=OPS,bob=SYS"
    user_jira_pairs: str = ""
    default_email_domain: str = ""

    # Jira
    jira_url: str = ""
    jira_browse_url: str = ""
    jira_username: str = ""
    jira_api_token: str = ""
    jira_issue_type: str = "Task"
    jira_dry_run: bool = False
    jira_timeout_seconds: float = 10.0

    # Pipeline
    event_queue_size: int = Field(default=1, ge=1)
    message_cache_ttl: float = Field(default=5.0, gt=0)

    # App
    log_level: str = "INFO"
    log_format: str = "json"
    host: str = "0.0.0.0"
    port: int = 8080

    @property
    def browse_base_url(self) -> str:
        """Base URL used to build ticket links shown in Slack."""
        return (self.jira_browse_url or self.jira_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()
