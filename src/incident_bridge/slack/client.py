"""Async Slack client construction.

One AsyncWebClient is created per process from the bot token in the
credential set and shared by the sender and the command handler.
"""

from slack_sdk.web.async_client import AsyncWebClient

from incident_bridge.config import Credentials


def create_slack_client(credentials: Credentials) -> AsyncWebClient:
    """Return an async Slack client authenticated with the bot token."""
    return AsyncWebClient(token=credentials.slack_bot_token.get_secret_value())
