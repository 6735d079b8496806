"""Routing of parsed PagerDuty events to Slack notifications."""

import logging
from typing import assert_never

from incident_bridge import messages
from incident_bridge.models.notification import OutboundNotification, StatusButton
from incident_bridge.models.pagerduty import (
    IncidentAcknowledged,
    IncidentReassigned,
    IncidentResolved,
    IncidentTriggered,
    PingEvent,
    WebhookEnvelope,
)
from incident_bridge.pagerduty.client import IncidentDirectory

logger = logging.getLogger(__name__)

PING_ACK_TEXT = "Received ping event from PagerDuty"


class NotificationRouter:
    """Decides whether an incident event is due in Slack, and with what content.

    At most one notification is produced per envelope. The message is fully
    rendered before it is returned, so a rendering failure aborts the whole
    dispatch.
    """

    def __init__(self, directory: IncidentDirectory, diagnostic_channel: str):
        self._directory = directory
        self._diagnostic_channel = diagnostic_channel

    async def route(self, envelope: WebhookEnvelope) -> OutboundNotification | None:
        event = envelope.event

        if isinstance(event, PingEvent):
            return OutboundNotification(channel=self._diagnostic_channel, text=PING_ACK_TEXT)

        channel = await self._directory.resolve_channel(event.data.id)
        if channel is None:
            logger.info(
                "Incident %s was not raised from Slack, skipping %s",
                event.data.id,
                event.event_type,
            )
            return None

        data = event.data
        if isinstance(event, IncidentTriggered):
            return OutboundNotification(
                channel=channel,
                text=messages.incident_triggered(
                    data.title, data.html_url, data.id, data.urgency, data.number
                ),
                button=StatusButton(incident_id=data.id),
            )
        if isinstance(event, IncidentAcknowledged):
            text = messages.incident_acknowledged(
                data.title, data.html_url, data.number, event.agent.summary
            )
        elif isinstance(event, IncidentReassigned):
            text = messages.incident_reassigned(
                data.title,
                data.html_url,
                data.number,
                ", ".join(assignee.summary for assignee in event.data.assignees),
            )
        elif isinstance(event, IncidentResolved):
            text = messages.incident_resolved(
                data.title, data.html_url, data.number, event.agent.summary
            )
        else:
            assert_never(event)
        return OutboundNotification(channel=channel, text=text)
