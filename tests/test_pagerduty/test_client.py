"""Tests for the PagerDuty REST and Events client."""

import json

import httpx
import pytest

from incident_bridge.errors import DependencyError
from incident_bridge.pagerduty.client import IncidentDirectory, IncidentStatus


def _directory(credentials, settings, handler) -> IncidentDirectory:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return IncidentDirectory(credentials, settings, http)


def _incident_with_channel(details: object) -> dict:
    return {
        "incident": {
            "id": "Q1",
            "status": "triggered",
            "first_trigger_log_entry": {
                "type": "trigger_log_entry",
                "channel": {"type": "api", "details": details},
            },
        }
    }


# -- resolve_channel --


async def test_resolve_channel_reads_trigger_details(credentials, settings):
    """The channel embedded at trigger time is read back from the log entry."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=_incident_with_channel("ops-room"))

    directory = _directory(credentials, settings, handler)
    assert await directory.resolve_channel("Q1") == "ops-room"

    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/incidents/Q1"
    assert request.url.params["include[]"] == "first_trigger_log_entries"
    assert request.headers["Authorization"] == "Token token=rest-key-test"


@pytest.mark.parametrize(
    "body",
    [
        {"incident": {"id": "Q1", "status": "triggered"}},
        {"incident": {"id": "Q1", "first_trigger_log_entry": {"channel": {"type": "web_trigger"}}}},
        _incident_with_channel(""),
        _incident_with_channel({"summary": "created in console"}),
        {},
    ],
)
async def test_resolve_channel_absent(credentials, settings, body: dict):
    """Incidents without channel details resolve to None, not an error."""
    directory = _directory(credentials, settings, lambda request: httpx.Response(200, json=body))
    assert await directory.resolve_channel("Q1") is None


async def test_resolve_channel_error_status(credentials, settings):
    """A non-2xx response raises DependencyError."""
    directory = _directory(credentials, settings, lambda request: httpx.Response(404, json={}))
    with pytest.raises(DependencyError):
        await directory.resolve_channel("Q1")


async def test_transport_failure_raises_dependency_error(credentials, settings):
    """Network failures are reported as DependencyError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    directory = _directory(credentials, settings, handler)
    with pytest.raises(DependencyError):
        await directory.resolve_channel("Q1")


# -- trigger_incident --


async def test_trigger_incident_posts_event(credentials, settings):
    """Triggering posts a critical event with the channel as custom details."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(202, json={"status": "success", "dedup_key": "abc"})

    directory = _directory(credentials, settings, handler)
    await directory.trigger_incident("escalate outage in region X", "C0OPS")

    request = seen[0]
    assert request.method == "POST"
    assert str(request.url) == "https://events.pd.test/v2/enqueue"
    assert json.loads(request.content) == {
        "payload": {
            "summary": "escalate outage in region X",
            "severity": "critical",
            "source": "slack",
            "custom_details": "C0OPS",
        },
        "routing_key": "routing-key-test",
        "event_action": "trigger",
    }


async def test_trigger_incident_error_status(credentials, settings):
    """A rejected event raises DependencyError."""
    directory = _directory(
        credentials, settings, lambda request: httpx.Response(400, json={"status": "invalid event"})
    )
    with pytest.raises(DependencyError):
        await directory.trigger_incident("escalate", "C0OPS")


# -- get_incident --


async def test_get_incident_returns_status(credentials, settings):
    """The live status is returned without the log entry include."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"incident": {"id": "Q1", "status": "acknowledged"}})

    directory = _directory(credentials, settings, handler)
    assert await directory.get_incident("Q1") == IncidentStatus(incident_id="Q1", status="acknowledged")
    assert "include[]" not in seen[0].url.params


async def test_get_incident_is_not_cached(credentials, settings):
    """Every call goes to PagerDuty."""
    statuses = iter(["triggered", "resolved"])
    directory = _directory(
        credentials,
        settings,
        lambda request: httpx.Response(200, json={"incident": {"id": "Q1", "status": next(statuses)}}),
    )
    assert (await directory.get_incident("Q1")).status == "triggered"
    assert (await directory.get_incident("Q1")).status == "resolved"


async def test_get_incident_error_status(credentials, settings):
    """A server error raises DependencyError."""
    directory = _directory(credentials, settings, lambda request: httpx.Response(500))
    with pytest.raises(DependencyError):
        await directory.get_incident("Q1")


async def test_get_incident_missing_body(credentials, settings):
    """A success response without an incident is a dependency failure."""
    directory = _directory(credentials, settings, lambda request: httpx.Response(200, json={}))
    with pytest.raises(DependencyError):
        await directory.get_incident("Q1")


# -- unreadable bodies --


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json=[1]),
    ],
)
async def test_resolve_channel_unreadable_body(credentials, settings, response: httpx.Response):
    """A success response that is not a JSON object is a dependency error."""
    directory = _directory(credentials, settings, lambda request: response)
    with pytest.raises(DependencyError, match="unreadable body"):
        await directory.resolve_channel("Q1")


@pytest.mark.parametrize(
    "body",
    [
        {"incident": "Q1"},
        {"incident": {"first_trigger_log_entry": ["x"]}},
        {"incident": {"first_trigger_log_entry": {"channel": "api"}}},
    ],
)
async def test_resolve_channel_unexpected_nesting(credentials, settings, body: dict):
    """Objects of the wrong shape along the channel path resolve to None."""
    directory = _directory(credentials, settings, lambda request: httpx.Response(200, json=body))
    assert await directory.resolve_channel("Q1") is None


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>maintenance</html>"),
        httpx.Response(200, json=[1]),
        httpx.Response(200, json={"incident": ["Q1"]}),
    ],
)
async def test_get_incident_unreadable_body(credentials, settings, response: httpx.Response):
    """Non-object bodies from the status lookup are dependency errors."""
    directory = _directory(credentials, settings, lambda request: response)
    with pytest.raises(DependencyError):
        await directory.get_incident("Q1")


async def test_incident_id_is_escaped_in_path(credentials, settings):
    """Incident ids cannot change the request path."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"incident": {"id": "Q1/../users", "status": "triggered"}})

    directory = _directory(credentials, settings, handler)
    await directory.get_incident("Q1/../users")

    assert seen[0].url.raw_path == b"/incidents/Q1%2F..%2Fusers"
