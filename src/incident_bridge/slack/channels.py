"""Channel lookup and notification delivery to Slack."""

import logging

from slack_sdk.errors import SlackApiError
from slack_sdk.web.async_client import AsyncWebClient

from incident_bridge.errors import DependencyError
from incident_bridge.models.notification import OutboundNotification

logger = logging.getLogger(__name__)

FALLBACK_TEXT = "PagerDuty status update"


async def find_channel_id(client: AsyncWebClient, channel: str) -> str:
    """Resolve a channel name or id to a channel id.

    Pages through conversations.list (public and private, archived excluded)
    and matches on name or id. Raises DependencyError if nothing matches.
    """
    cursor: str | None = None
    try:
        while True:
            kwargs: dict = {
                "types": "public_channel,private_channel",
                "exclude_archived": True,
                "limit": 200,
            }
            if cursor:
                kwargs["cursor"] = cursor

            response = await client.conversations_list(**kwargs)
            for chan in response.get("channels") or []:
                if chan.get("name") == channel or chan.get("id") == channel:
                    return chan["id"]

            cursor = (response.get("response_metadata") or {}).get("next_cursor")
            if not cursor:
                break
    except SlackApiError as exc:
        error_code = exc.response.get("error", "") if exc.response else ""
        logger.error("conversations.list failed: %s", error_code, exc_info=True)
        raise DependencyError(f"Slack conversations.list failed: {error_code}") from exc

    raise DependencyError(f"Channel {channel} not found")


class SlackSender:
    """Posts outbound notifications as a single mrkdwn section block."""

    def __init__(self, client: AsyncWebClient):
        self._client = client

    async def send(self, notification: OutboundNotification) -> None:
        channel_id = await find_channel_id(self._client, notification.channel)
        section: dict = {
            "type": "section",
            "text": {"type": "mrkdwn", "text": notification.text},
        }
        if notification.button is not None:
            section["accessory"] = notification.button.to_block()

        logger.info("Sending message to channel %s", channel_id)
        try:
            await self._client.chat_postMessage(
                channel=channel_id,
                blocks=[section],
                text=FALLBACK_TEXT,
            )
        except SlackApiError as exc:
            error_code = exc.response.get("error", "") if exc.response else ""
            logger.error("chat.postMessage to %s failed: %s", channel_id, error_code, exc_info=True)
            raise DependencyError(f"Slack chat.postMessage failed: {error_code}") from exc
