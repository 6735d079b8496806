"""Data models for webhook envelopes, chat intents and outbound notifications."""

from incident_bridge.models.chat import (
    ChatIntent,
    EscalateIntent,
    HelpIntent,
    PingIntent,
    StatusQueryIntent,
)
from incident_bridge.models.notification import (
    STATUS_ACTION_ID,
    OutboundNotification,
    StatusButton,
)
from incident_bridge.models.pagerduty import (
    Agent,
    AssignedIncidentData,
    Assignee,
    IncidentAcknowledged,
    IncidentData,
    IncidentReassigned,
    IncidentResolved,
    IncidentTriggered,
    PingEvent,
    WebhookEnvelope,
)

__all__ = [
    "Agent",
    "AssignedIncidentData",
    "Assignee",
    "ChatIntent",
    "EscalateIntent",
    "HelpIntent",
    "IncidentAcknowledged",
    "IncidentData",
    "IncidentReassigned",
    "IncidentResolved",
    "IncidentTriggered",
    "OutboundNotification",
    "PingEvent",
    "PingIntent",
    "STATUS_ACTION_ID",
    "StatusButton",
    "StatusQueryIntent",
    "WebhookEnvelope",
]
