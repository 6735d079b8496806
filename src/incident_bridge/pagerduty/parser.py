"""Decoding of raw PagerDuty webhook bodies into typed envelopes."""

import logging

from pydantic import TypeAdapter, ValidationError

from incident_bridge.errors import MalformedPayloadError
from incident_bridge.models.pagerduty import WebhookEnvelope

logger = logging.getLogger(__name__)

_ENVELOPE = TypeAdapter(WebhookEnvelope)


def parse(body: bytes) -> WebhookEnvelope:
    """Decode a webhook body.

    Unknown ``resource_type`` or ``event_type`` values and missing required
    fields fail loudly with MalformedPayloadError rather than being dropped.
    """
    try:
        return _ENVELOPE.validate_json(body)
    except ValidationError as exc:
        logger.warning(
            "Rejected PagerDuty payload: %s",
            "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            ),
        )
        raise MalformedPayloadError("Unrecognized PagerDuty webhook payload") from exc
