"""Jira Reactor: file Jira tickets from Slack messages with an emoji reaction."""

__version__ = "0.1.0"
