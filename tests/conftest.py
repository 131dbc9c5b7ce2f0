"""Shared test fixtures."""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from jira_reactor.app import app
from jira_reactor.config import Settings
from jira_reactor.event_queue import EventQueue
from jira_reactor.slack.router import get_bot_user_id, get_event_queue

BOT_USER_ID = "U_BOT"


def _make_settings(**overrides: object) -> Settings:
    """Build Settings with test defaults, ignoring any local .env file."""
    values: dict = {
        "slack_bot_token": "xoxb-test",
        "slack_signing_secret": "",
        "slack_verification_token": "",
        "trigger_emoji": "create-ticket",
        "completed_emoji": "white_check_mark",
        "working_emoji": "hourglass_flowing_sand",
        "error_emoji": "x",
        "jira_url": "https://jira.example.com",
        "message_cache_ttl": 5.0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture()
def settings() -> Settings:
    return _make_settings()


@pytest.fixture()
def event_queue() -> EventQueue:
    """A roomy queue so endpoint tests never block on put."""
    return EventQueue(maxsize=10)


@pytest.fixture()
def client(event_queue: EventQueue):
    """TestClient without the lifespan; queue and bot identity are overridden."""
    app.dependency_overrides[get_event_queue] = lambda: event_queue
    app.dependency_overrides[get_bot_user_id] = lambda: BOT_USER_ID
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def slack_client() -> AsyncMock:
    """An AsyncMock standing in for slack_sdk's AsyncWebClient."""
    return AsyncMock()


@pytest.fixture()
def make_settings():
    """Factory for Settings with per-test overrides."""
    return _make_settings
