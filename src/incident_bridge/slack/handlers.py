"""Slack command handling: mentions, slash commands and status button clicks."""

import logging
from typing import assert_never

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from incident_bridge import messages
from incident_bridge.config import Credentials
from incident_bridge.errors import BridgeError, DependencyError
from incident_bridge.models.chat import (
    ChatIntent,
    EscalateIntent,
    HelpIntent,
    PingIntent,
    StatusQueryIntent,
)
from incident_bridge.pagerduty.client import IncidentDirectory
from incident_bridge.slack.commands import parse_action, parse_command, parse_mention

logger = logging.getLogger(__name__)


class ChatCommandHandler:
    """Executes chat intents and replies in the originating channel.

    The public ``handle_*`` entry points run as background tasks after Slack
    has been acknowledged, so failures are logged and no reply is posted.
    """

    def __init__(
        self,
        credentials: Credentials,
        directory: IncidentDirectory,
        client: AsyncWebClient,
    ):
        self._credentials = credentials
        self._directory = directory
        self._client = client

    async def handle_mention(self, event: dict) -> None:
        """Handle an ``app_mention`` event from the Events API."""
        user = event.get("username") or event.get("user") or ""
        channel = event.get("channel", "")
        intent = parse_mention(
            event.get("text"), user, channel, self._credentials.ping_phrase
        )
        logger.info("Mention from %s in %s parsed as %s", user, channel, intent.kind)
        await self._run(intent, channel)

    async def handle_command(self, form: dict) -> None:
        """Handle the configured slash command."""
        user = form.get("user_id", "")
        channel = form.get("channel_id", "")
        intent = parse_command(form.get("text"), user, channel)
        logger.info("Command %s from %s parsed as %s", form.get("command"), user, intent.kind)
        await self._run(intent, channel)

    async def handle_action(self, payload: dict) -> None:
        """Handle an interactive payload; only the status button is acted on."""
        intent = parse_action(payload)
        if intent is None:
            return
        await self._run(intent, intent.channel)

    async def _run(self, intent: ChatIntent, channel: str) -> None:
        try:
            await self.dispatch(intent, channel)
        except BridgeError:
            logger.error("Failed to handle %s intent in %s", intent.kind, channel, exc_info=True)

    async def dispatch(self, intent: ChatIntent, channel: str) -> None:
        """Execute ``intent`` and post the reply to ``channel``."""
        if isinstance(intent, HelpIntent):
            await self._reply_blocks(channel, messages.help_text(intent.user, intent.bot_name))
        elif isinstance(intent, PingIntent):
            await self._reply(channel, text=f"received ping from <@{intent.user}> :wave:")
        elif isinstance(intent, EscalateIntent):
            await self._directory.trigger_incident(intent.text, intent.channel)
            await self._reply_blocks(
                channel,
                messages.user_triggered(intent.user, intent.text),
                fallback="Incident triggered",
            )
        elif isinstance(intent, StatusQueryIntent):
            incident = await self._directory.get_incident(intent.incident_id)
            await self._reply(
                channel,
                text=messages.incident_status(intent.user, intent.incident_id, incident.status),
            )
        else:
            assert_never(intent)

    async def _reply_blocks(self, channel: str, text: str, fallback: str | None = None) -> None:
        await self._reply(
            channel,
            blocks=[{"type": "section", "text": {"type": "mrkdwn", "text": text}}],
            text=fallback or text,
        )

    async def _reply(self, channel: str, **kwargs) -> None:
        try:
            await self._client.chat_postMessage(channel=channel, **kwargs)
        except SlackApiError as exc:
            error_code = exc.response.get("error", "") if exc.response else ""
            raise DependencyError(f"Slack chat.postMessage failed: {error_code}") from exc
