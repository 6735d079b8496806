"""Error taxonomy for the bridge.

Every error raised on the request path derives from ``BridgeError`` so the
webhook boundary can reject uniformly without leaking which check failed.
"""


class BridgeError(Exception):
    """Base class for all bridge errors."""


class AuthenticationError(BridgeError):
    """Inbound webhook signature is missing or does not match."""


class MalformedPayloadError(BridgeError):
    """Inbound payload is not valid JSON or has an unrecognized shape."""


class DependencyError(BridgeError):
    """PagerDuty or Slack answered with a non-success response."""


class ConfigurationError(BridgeError):
    """A required secret or credential is missing at startup."""


class RenderError(BridgeError):
    """A message template references a value that was not supplied."""
