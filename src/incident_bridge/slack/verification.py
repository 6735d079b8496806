"""Slack request signature verification as a FastAPI dependency."""

from fastapi import Depends, HTTPException, Request
from slack_sdk.signature import SignatureVerifier

from incident_bridge.bridge import Bridge, get_bridge


async def verify_slack_request(request: Request, bridge: Bridge = Depends(get_bridge)) -> bytes:
    """Verify the Slack request signature and return the raw body.

    Reads the raw body FIRST (before any parsing) so verification uses the
    exact bytes Slack signed. Raises HTTPException(403) if the signature is
    invalid or stale.
    """
    body = await request.body()

    timestamp = request.headers.get("X-Slack-Request-Timestamp", "")
    signature = request.headers.get("X-Slack-Signature", "")

    verifier = SignatureVerifier(
        signing_secret=bridge.credentials.slack_signing_secret.get_secret_value()
    )

    if not verifier.is_valid(body=body.decode("utf-8"), timestamp=timestamp, signature=signature):
        raise HTTPException(status_code=403, detail="Invalid Slack signature")

    return body
