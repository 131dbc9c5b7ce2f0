"""Slack ingress and signaling: webhook handling, verification, reactions and replies."""

from jira_reactor.slack.client import authenticate, get_slack_client, reset_client
from jira_reactor.slack.notifier import (
    add_reaction,
    post_ephemeral_reply,
    post_thread_reply,
    remove_reaction,
)
from jira_reactor.slack.router import router

__all__ = [
    "add_reaction",
    "authenticate",
    "get_slack_client",
    "post_ephemeral_reply",
    "post_thread_reply",
    "remove_reaction",
    "reset_client",
    "router",
]
