"""Slack webhook routes: Events API, interactivity and slash commands."""

import json
import logging
from urllib.parse import parse_qsl

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from fastapi.responses import JSONResponse, Response

from incident_bridge.bridge import Bridge, get_bridge
from incident_bridge.slack.verification import verify_slack_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/slack", tags=["slack"])


def _parse_form(body: bytes) -> dict[str, str]:
    return dict(parse_qsl(body.decode("utf-8"), keep_blank_values=True))


def handle_slack_event(
    payload: dict, bridge: Bridge, background_tasks: BackgroundTasks
) -> JSONResponse:
    """Dispatch an Events API payload based on its type.

    - url_verification: return the challenge token
    - event_callback with app_mention: handle in the background
    - anything else: acknowledge with 200
    """
    if payload.get("type") == "url_verification":
        return JSONResponse({"challenge": payload.get("challenge", "")})

    if payload.get("type") == "event_callback":
        event = payload.get("event", {})
        if event.get("type") == "app_mention" and not event.get("bot_id"):
            background_tasks.add_task(bridge.commands.handle_mention, event)
        else:
            logger.debug("Ignoring Slack event %s", event.get("type"))

    return JSONResponse({"ok": True})


def handle_slack_interaction(
    body: bytes, bridge: Bridge, background_tasks: BackgroundTasks
) -> Response:
    """Acknowledge an interactive payload immediately and handle it in the background."""
    raw = _parse_form(body).get("payload", "")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail="Invalid interaction payload") from exc

    background_tasks.add_task(bridge.commands.handle_action, payload)
    return Response(status_code=200)


def handle_slack_command(
    form: dict[str, str], bridge: Bridge, background_tasks: BackgroundTasks
) -> Response:
    """Acknowledge the configured slash command and handle it in the background."""
    if form.get("command") != bridge.credentials.slack_command:
        logger.info("Ignoring unknown slash command %s", form.get("command"))
        return Response(status_code=200)

    background_tasks.add_task(bridge.commands.handle_command, form)
    return Response(status_code=200)


def dispatch_slack_body(
    request: Request, body: bytes, bridge: Bridge, background_tasks: BackgroundTasks
) -> Response:
    """Route a verified Slack delivery by shape, for single-endpoint deployments."""
    if request.headers.get("X-Slack-Retry-Num"):
        return JSONResponse({"ok": True})

    if request.headers.get("content-type", "").startswith("application/x-www-form-urlencoded"):
        form = _parse_form(body)
        if "payload" in form:
            return handle_slack_interaction(body, bridge, background_tasks)
        return handle_slack_command(form, bridge, background_tasks)

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise HTTPException(status_code=400, detail="Invalid JSON body") from exc
    return handle_slack_event(payload, bridge, background_tasks)


@router.post("/events")
async def slack_events(
    request: Request,
    background_tasks: BackgroundTasks,
    body: bytes = Depends(verify_slack_request),
    bridge: Bridge = Depends(get_bridge),
) -> Response:
    """Receive Slack Events API deliveries.

    Slack retries (X-Slack-Retry-Num header) are acknowledged immediately
    to prevent duplicate processing.
    """
    return dispatch_slack_body(request, body, bridge, background_tasks)


@router.post("/interactions")
async def slack_interactions(
    background_tasks: BackgroundTasks,
    body: bytes = Depends(verify_slack_request),
    bridge: Bridge = Depends(get_bridge),
) -> Response:
    """Receive interactive component callbacks (button clicks)."""
    return handle_slack_interaction(body, bridge, background_tasks)


@router.post("/commands")
async def slack_commands(
    background_tasks: BackgroundTasks,
    body: bytes = Depends(verify_slack_request),
    bridge: Bridge = Depends(get_bridge),
) -> Response:
    """Receive slash command invocations."""
    return handle_slack_command(_parse_form(body), bridge, background_tasks)
