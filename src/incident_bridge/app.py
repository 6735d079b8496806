"""FastAPI application with lifespan, health endpoint and single-endpoint dispatch."""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import BackgroundTasks, Depends, FastAPI, Request
from fastapi.responses import Response

from incident_bridge import __version__
from incident_bridge.bridge import Bridge, build_bridge, get_bridge
from incident_bridge.config import get_settings, load_credentials
from incident_bridge.logging_config import configure_logging
from incident_bridge.pagerduty.webhook import handle_pagerduty_request
from incident_bridge.pagerduty.webhook import router as pagerduty_router
from incident_bridge.slack.client import create_slack_client
from incident_bridge.slack.router import dispatch_slack_body
from incident_bridge.slack.router import router as slack_router
from incident_bridge.slack.verification import verify_slack_request

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging, load credentials and wire the bridge.

    A missing credential raises ConfigurationError here and aborts startup.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    credentials = load_credentials(settings)

    async with httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds)) as http:
        app.state.settings = settings
        app.state.bridge = build_bridge(
            credentials, settings, http, create_slack_client(credentials)
        )
        logger.info("Bridge started (%s)", settings.environment)
        yield


app = FastAPI(
    title="Incident Bridge",
    lifespan=lifespan,
)
app.include_router(pagerduty_router)
app.include_router(slack_router)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "service": "incident-bridge",
        "version": __version__,
    }


@app.post("/")
async def webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    bridge: Bridge = Depends(get_bridge),
) -> Response:
    """Single endpoint for both platforms, discriminated by User-Agent.

    PagerDuty deliveries identify themselves with a ``PagerDuty`` user agent;
    everything else is treated as a Slack delivery.
    """
    if request.headers.get("User-Agent", "").startswith("PagerDuty"):
        return await handle_pagerduty_request(request, bridge)

    body = await verify_slack_request(request, bridge)
    return dispatch_slack_body(request, body, bridge, background_tasks)
