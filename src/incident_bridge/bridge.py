"""Component graph built once per process and shared by the request handlers."""

from dataclasses import dataclass

import httpx
from fastapi import Request
from slack_sdk.web.async_client import AsyncWebClient

from incident_bridge.config import Credentials, Settings
from incident_bridge.pagerduty.client import IncidentDirectory
from incident_bridge.pagerduty.router import NotificationRouter
from incident_bridge.slack.channels import SlackSender
from incident_bridge.slack.handlers import ChatCommandHandler


@dataclass(frozen=True)
class Bridge:
    credentials: Credentials
    directory: IncidentDirectory
    notifications: NotificationRouter
    sender: SlackSender
    commands: ChatCommandHandler


def build_bridge(
    credentials: Credentials,
    settings: Settings,
    http: httpx.AsyncClient,
    slack_client: AsyncWebClient,
) -> Bridge:
    """Wire every component from explicit dependencies."""
    directory = IncidentDirectory(credentials, settings, http)
    return Bridge(
        credentials=credentials,
        directory=directory,
        notifications=NotificationRouter(directory, credentials.diagnostic_channel),
        sender=SlackSender(slack_client),
        commands=ChatCommandHandler(credentials, directory, slack_client),
    )


def get_bridge(request: Request) -> Bridge:
    """FastAPI dependency returning the bridge built at startup."""
    return request.app.state.bridge
