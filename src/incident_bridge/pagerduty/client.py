"""PagerDuty REST and Events API client.

The channel that raised an incident travels through PagerDuty itself: it is
sent as ``custom_details`` on the Events API trigger and read back from the
incident's first trigger log entry. No other state is kept.
"""

import logging
from dataclasses import dataclass
from urllib.parse import quote

import httpx

from incident_bridge.config import Credentials, Settings
from incident_bridge.errors import DependencyError

logger = logging.getLogger(__name__)


def _lookup(body: dict, *keys: str) -> object:
    """Follow nested object keys, returning None where the path breaks."""
    value: object = body
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


@dataclass(frozen=True)
class IncidentStatus:
    incident_id: str
    status: str


class IncidentDirectory:
    """Resolves, fetches and creates PagerDuty incidents."""

    def __init__(self, credentials: Credentials, settings: Settings, http: httpx.AsyncClient):
        self._credentials = credentials
        self._http = http
        self._incidents_url = f"{settings.pagerduty_rest_url.rstrip('/')}/incidents"
        self._events_url = settings.pagerduty_events_url

    def _rest_headers(self) -> dict[str, str]:
        token = self._credentials.pagerduty_rest_api_key.get_secret_value()
        return {
            "Accept": "application/vnd.pagerduty+json;version=2",
            "Content-Type": "application/json",
            "Authorization": f"Token token={token}",
        }

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            response = await self._http.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "PagerDuty %s %s returned %d", method, url, exc.response.status_code
            )
            raise DependencyError(
                f"PagerDuty returned {exc.response.status_code} for {method} {url}"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("PagerDuty %s %s failed: %s", method, url, exc)
            raise DependencyError(f"PagerDuty request failed: {method} {url}") from exc
        return response

    @staticmethod
    def _json(response: httpx.Response) -> dict:
        """Decode a PagerDuty response body, which must be a JSON object."""
        try:
            body = response.json()
        except ValueError as exc:
            raise DependencyError("PagerDuty returned an unreadable body") from exc
        if not isinstance(body, dict):
            raise DependencyError("PagerDuty returned an unreadable body")
        return body

    def _incident_url(self, incident_id: str) -> str:
        return f"{self._incidents_url}/{quote(incident_id, safe='')}"

    async def resolve_channel(self, incident_id: str) -> str | None:
        """Return the Slack channel that raised ``incident_id``, or None.

        None means the incident was created outside the bridge (for example
        directly in the PagerDuty console) and is not an error.
        """
        logger.info("Resolving channel for incident %s", incident_id)
        response = await self._request(
            "GET",
            self._incident_url(incident_id),
            params={"include[]": "first_trigger_log_entries"},
            headers=self._rest_headers(),
        )
        body = self._json(response)
        details = _lookup(body, "incident", "first_trigger_log_entry", "channel", "details")
        if isinstance(details, str) and details.strip():
            return details.strip()
        if details is not None:
            logger.warning("Ignoring non-text channel details on incident %s", incident_id)
        return None

    async def trigger_incident(self, summary: str, channel: str) -> None:
        """Open a critical incident carrying ``channel`` for later resolution."""
        logger.info("Triggering PagerDuty incident from channel %s", channel)
        payload = {
            "payload": {
                "summary": summary,
                "severity": "critical",
                "source": "slack",
                "custom_details": channel,
            },
            "routing_key": self._credentials.pagerduty_events_api_key.get_secret_value(),
            "event_action": "trigger",
        }
        response = await self._request(
            "POST",
            self._events_url,
            json=payload,
            headers={"Content-Type": "application/json"},
        )
        logger.info("PagerDuty accepted event (HTTP %d)", response.status_code)

    async def get_incident(self, incident_id: str) -> IncidentStatus:
        """Fetch the live status of an incident."""
        logger.info("Fetching status for incident %s", incident_id)
        response = await self._request(
            "GET",
            self._incident_url(incident_id),
            headers=self._rest_headers(),
        )
        incident = self._json(response).get("incident")
        if not isinstance(incident, dict) or "status" not in incident:
            raise DependencyError(f"PagerDuty response for {incident_id} has no incident status")
        return IncidentStatus(incident_id=incident.get("id", incident_id), status=incident["status"])
