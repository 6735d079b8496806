"""PagerDuty ingress and API access: signatures, envelope parsing, routing and the REST/Events client."""

from incident_bridge.pagerduty.client import IncidentDirectory, IncidentStatus
from incident_bridge.pagerduty.parser import parse
from incident_bridge.pagerduty.router import NotificationRouter
from incident_bridge.pagerduty.verification import sign, signature_from_headers, verify

__all__ = [
    "IncidentDirectory",
    "IncidentStatus",
    "NotificationRouter",
    "parse",
    "sign",
    "signature_from_headers",
    "verify",
]
