"""PagerDuty webhook v3 envelope models.

The envelope is a two-level tagged union: ``resource_type`` separates the
connectivity ping from incident events, and ``event_type`` selects the
incident lifecycle variant. All models are frozen once parsed.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Agent(_Frozen):
    """The user or integration that caused the event."""

    summary: str


class Assignee(_Frozen):
    summary: str  # Display name


class IncidentData(_Frozen):
    """Incident fields carried by every incident event."""

    id: str
    html_url: str
    number: int
    title: str
    urgency: str


class AssignedIncidentData(IncidentData):
    """Incident fields for events that change who is working the incident."""

    assignees: list[Assignee]


class PingEvent(_Frozen):
    """Connectivity check sent when a webhook subscription is tested."""

    resource_type: Literal["pagey"]
    event_type: str = "pagey.ping"


class IncidentTriggered(_Frozen):
    resource_type: Literal["incident"]
    event_type: Literal["incident.triggered"]
    agent: Agent
    data: IncidentData


class IncidentAcknowledged(_Frozen):
    resource_type: Literal["incident"]
    event_type: Literal["incident.acknowledged"]
    agent: Agent
    data: AssignedIncidentData


class IncidentReassigned(_Frozen):
    resource_type: Literal["incident"]
    event_type: Literal["incident.reassigned"]
    agent: Agent
    data: AssignedIncidentData


class IncidentResolved(_Frozen):
    resource_type: Literal["incident"]
    event_type: Literal["incident.resolved"]
    agent: Agent
    data: IncidentData


IncidentEvent = Annotated[
    Union[IncidentTriggered, IncidentAcknowledged, IncidentReassigned, IncidentResolved],
    Field(discriminator="event_type"),
]

WebhookEvent = Annotated[
    Union[PingEvent, IncidentEvent],
    Field(discriminator="resource_type"),
]


class WebhookEnvelope(_Frozen):
    """Decoded PagerDuty webhook delivery (exactly one event)."""

    event: WebhookEvent
