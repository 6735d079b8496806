"""Parsing of Slack mentions, slash commands and button clicks into chat intents.

Pure functions with no Slack transport dependency.
"""

import logging
import re

from incident_bridge.models.chat import (
    ChatIntent,
    EscalateIntent,
    HelpIntent,
    PingIntent,
    StatusQueryIntent,
)
from incident_bridge.models.notification import STATUS_ACTION_ID

logger = logging.getLogger(__name__)

# "<@U0BOT> escalate db is down" -> bot_name="U0BOT", message=" escalate db is down"
MENTION_PATTERN = re.compile(r"@(?P<bot_name>[^>]+)>(?P<message>.*)", re.DOTALL)

ESCALATE_KEYWORD = "escalate"


def split_mention(text: str | None) -> tuple[str, str]:
    """Split mention text into (bot_name, trimmed message body).

    Text without a mention prefix is treated as the body itself.
    """
    if not text:
        return "", ""
    match = MENTION_PATTERN.search(text)
    if match is None:
        return "", text.strip()
    return match.group("bot_name"), match.group("message").strip()


def parse_mention(
    text: str | None, user: str, channel: str, ping_phrase: str
) -> ChatIntent:
    """Map an app mention to an intent.

    - empty body -> Help
    - body equal to the ping phrase -> Ping
    - body starting with "escalate" -> Escalate, with the whole body as summary
    - anything else -> Help
    """
    bot_name, body = split_mention(text)

    if not body:
        return HelpIntent(user=user, bot_name=bot_name)
    if body == ping_phrase:
        return PingIntent(user=user)
    if body.startswith(ESCALATE_KEYWORD):
        return EscalateIntent(user=user, text=body, channel=channel)
    return HelpIntent(user=user, bot_name=bot_name)


def parse_command(text: str | None, user: str, channel: str, bot_name: str = "") -> ChatIntent:
    """Map a slash command invocation to an intent.

    The command text is the incident summary; empty text or ``help`` asks for usage.
    """
    body = (text or "").strip()
    if not body or body == "help":
        return HelpIntent(user=user, bot_name=bot_name)
    return EscalateIntent(user=user, text=body, channel=channel)


def parse_action(payload: dict) -> StatusQueryIntent | None:
    """Extract a status query from an interactive ``block_actions`` payload.

    Returns None for any other payload type or for non-button actions.
    """
    if payload.get("type") != "block_actions":
        logger.info("Ignoring interaction of type %s", payload.get("type"))
        return None

    actions = payload.get("actions") or []
    action = actions[0] if actions else {}
    if action.get("type") != "button" or action.get("action_id") != STATUS_ACTION_ID:
        logger.info(
            "Ignoring action %s of type %s", action.get("action_id"), action.get("type")
        )
        return None

    incident_id = action.get("value") or ""
    if not incident_id:
        logger.warning("Status button carried no incident id")
        return None

    return StatusQueryIntent(
        user=(payload.get("user") or {}).get("id", ""),
        incident_id=incident_id,
        channel=(payload.get("channel") or {}).get("id", ""),
    )
