"""Slack ingress and egress: signature verification, command parsing, handlers and notifications."""

from incident_bridge.slack.channels import SlackSender, find_channel_id
from incident_bridge.slack.client import create_slack_client
from incident_bridge.slack.commands import parse_action, parse_command, parse_mention
from incident_bridge.slack.handlers import ChatCommandHandler

__all__ = [
    "ChatCommandHandler",
    "SlackSender",
    "create_slack_client",
    "find_channel_id",
    "parse_action",
    "parse_command",
    "parse_mention",
]
