"""PagerDuty webhook endpoint: verify, parse, route, send."""

import logging
from collections.abc import Mapping

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from incident_bridge.bridge import Bridge, get_bridge
from incident_bridge.errors import AuthenticationError, BridgeError
from incident_bridge.models.notification import OutboundNotification
from incident_bridge.pagerduty.parser import parse
from incident_bridge.pagerduty.verification import signature_from_headers, verify

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/pagerduty", tags=["pagerduty"])


async def process_webhook(
    headers: Mapping[str, str], body: bytes, bridge: Bridge
) -> OutboundNotification | None:
    """Run one PagerDuty delivery through the pipeline.

    Returns the notification that was sent, or None when the incident was
    not raised from Slack. Any BridgeError propagates to the caller.
    """
    verify(
        signature_from_headers(headers),
        body,
        bridge.credentials.pagerduty_signing_key.get_secret_value(),
    )
    envelope = parse(body)
    logger.info("Received PagerDuty %s", envelope.event.event_type)

    notification = await bridge.notifications.route(envelope)
    if notification is None:
        logger.info("Incident was triggered outside of the Slack app. No message sent.")
        return None

    await bridge.sender.send(notification)
    return notification


async def handle_pagerduty_request(request: Request, bridge: Bridge) -> JSONResponse:
    """Answer 200 ``{}`` on success and 403 ``{}`` on any failure."""
    body = await request.body()
    try:
        await process_webhook(request.headers, body, bridge)
    except AuthenticationError:
        logger.warning("Rejected PagerDuty webhook with invalid signature")
        return JSONResponse({}, status_code=403)
    except BridgeError as exc:
        logger.error("Rejected PagerDuty webhook: %s", exc, exc_info=True)
        return JSONResponse({}, status_code=403)
    except Exception:
        logger.exception("Unexpected failure handling PagerDuty webhook")
        return JSONResponse({}, status_code=403)
    return JSONResponse({})


@router.post("/webhook")
async def pagerduty_webhook(request: Request, bridge: Bridge = Depends(get_bridge)) -> JSONResponse:
    """Receive PagerDuty v3 webhook deliveries."""
    return await handle_pagerduty_request(request, bridge)
