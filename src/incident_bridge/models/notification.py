"""Outbound Slack notification model."""

from pydantic import BaseModel, ConfigDict

STATUS_ACTION_ID = "pagerduty-status-button"


class StatusButton(BaseModel):
    """Button carrying the incident id to the status action callback."""

    model_config = ConfigDict(frozen=True)

    incident_id: str
    text: str = "Check Status of the alert"
    action_id: str = STATUS_ACTION_ID

    def to_block(self) -> dict:
        """Render as a Block Kit button element."""
        return {
            "type": "button",
            "text": {"type": "plain_text", "text": self.text},
            "action_id": self.action_id,
            "value": self.incident_id,
        }


class OutboundNotification(BaseModel):
    """A single message due to a Slack channel."""

    model_config = ConfigDict(frozen=True)

    channel: str  # Channel name or id; resolved to an id before posting
    text: str  # Rendered mrkdwn
    button: StatusButton | None = None
