"""Chat intents derived from Slack mentions and button clicks."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _Intent(BaseModel):
    model_config = ConfigDict(frozen=True)

    user: str


class HelpIntent(_Intent):
    kind: Literal["help"] = "help"
    bot_name: str = ""


class PingIntent(_Intent):
    kind: Literal["ping"] = "ping"


class EscalateIntent(_Intent):
    kind: Literal["escalate"] = "escalate"
    text: str  # Full message body, used verbatim as the incident summary
    channel: str


class StatusQueryIntent(_Intent):
    kind: Literal["status_query"] = "status_query"
    incident_id: str
    channel: str = ""


ChatIntent = Annotated[
    Union[HelpIntent, PingIntent, EscalateIntent, StatusQueryIntent],
    Field(discriminator="kind"),
]
