"""PagerDuty webhook v3 signature verification.

PagerDuty signs the raw request body with HMAC-SHA256 and sends one or more
``v1=<hex>`` tokens, comma separated, in ``X-PagerDuty-Signature``. More than
one token is present while a signing secret is being rotated.
"""

import hashlib
import hmac
from collections.abc import Mapping

from incident_bridge.errors import AuthenticationError

SIGNATURE_HEADER = "X-PagerDuty-Signature"
SIGNATURE_VERSION = "v1="


def signature_from_headers(headers: Mapping[str, str]) -> str:
    """Return the signature header value, matching the header name case-insensitively."""
    wanted = SIGNATURE_HEADER.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def sign(body: bytes, secret: str) -> str:
    """Hex HMAC-SHA256 digest of ``body`` under ``secret``."""
    return hmac.new(secret.encode(), body, hashlib.sha256).hexdigest()


def verify(signature_header: str, body: bytes, secret: str) -> None:
    """Check that at least one ``v1=`` signature matches the raw body.

    Raises AuthenticationError when no candidate matches, including when the
    header is empty or carries no ``v1=`` tokens.
    """
    candidates = [
        token.strip()[len(SIGNATURE_VERSION):]
        for token in signature_header.split(",")
        if token.strip().startswith(SIGNATURE_VERSION)
    ]
    expected = sign(body, secret)
    if not any(hmac.compare_digest(candidate, expected) for candidate in candidates):
        raise AuthenticationError("Invalid PagerDuty signature")
