"""Tests for settings and logging configuration."""

import logging

import pytest

from jira_reactor.config import Settings
from jira_reactor.logging_config import build_logging_config


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.trigger_emoji == "create-jira-ticket"
    assert settings.completed_emoji == "+1"
    assert settings.working_emoji == "hourglass_flowing_sand"
    assert settings.error_emoji == "x"
    assert settings.event_queue_size == 1
    assert settings.jira_dry_run is False


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("TRIGGER_EMOJI", "ticket")
    monkeypatch.setenv("JIRA_DRY_RUN", "true")
    monkeypatch.setenv("USER_JIRA_PAIRS", "a@example.com=OPS")
    settings = Settings(_env_file=None)
    assert settings.trigger_emoji == "ticket"
    assert settings.jira_dry_run is True
    assert settings.user_jira_pairs == "a@example.com=OPS"


def test_queue_size_must_be_positive():
    with pytest.raises(ValueError):
        Settings(_env_file=None, event_queue_size=0)


def test_browse_base_url_fallback():
    assert Settings(_env_file=None, jira_url="https://jira.example.com/").browse_base_url == (
        "https://jira.example.com"
    )
    assert (
        Settings(
            _env_file=None,
            jira_url="https://api.example.com",
            jira_browse_url="https://jira.example.com",
        ).browse_base_url
        == "https://jira.example.com"
    )


def test_logging_config_json_default():
    config = build_logging_config()
    assert config["handlers"]["console"]["formatter"] == "json"
    assert config["root"]["level"] == "INFO"
    assert config["formatters"]["json"]["rename_fields"]["levelname"] == "severity"


def test_logging_config_text_and_level():
    config = build_logging_config("debug", "text")
    assert config["handlers"]["console"]["formatter"] == "text"
    assert config["root"]["level"] == "DEBUG"


def test_logging_config_unknown_values_fall_back():
    config = build_logging_config("chatty", "xml")
    assert config["handlers"]["console"]["formatter"] == "json"
    assert config["root"]["level"] == "INFO"


def test_logging_config_does_not_mutate_template():
    build_logging_config("DEBUG", "text")
    assert build_logging_config()["root"]["level"] == logging.getLevelName(logging.INFO)
