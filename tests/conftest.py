"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from incident_bridge.app import app
from incident_bridge.config import CREDENTIAL_KEYS, Credentials, Settings, get_settings

TEST_SLACK_SIGNING_SECRET = "test_slack_signing_secret"
TEST_PD_SIGNING_KEY = "test_pd_signing_key"


@pytest.fixture
def credentials() -> Credentials:
    """A complete credential set with recognisable fake values."""
    return Credentials(
        slack_signing_secret=SecretStr(TEST_SLACK_SIGNING_SECRET),
        slack_bot_token=SecretStr("xoxb-test"),
        pagerduty_signing_key=SecretStr(TEST_PD_SIGNING_KEY),
        pagerduty_events_api_key=SecretStr("routing-key-test"),
        pagerduty_rest_api_key=SecretStr("rest-key-test"),
        slack_command="/pd-trigger",
        ping_phrase="ping-bot",
        diagnostic_channel="pagerduty-testing",
    )


@pytest.fixture
def settings() -> Settings:
    """Settings pointing the PagerDuty client at test hosts."""
    return Settings(
        _env_file=None,
        pagerduty_rest_url="https://pd.test",
        pagerduty_events_url="https://events.pd.test/v2/enqueue",
    )


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch):
    """TestClient with the lifespan run against environment-backed credentials."""
    monkeypatch.delenv("SECRETS_MANAGER_SECRET_ID", raising=False)
    for field in CREDENTIAL_KEYS.values():
        monkeypatch.setenv(field.upper(), f"env-{field}")
    get_settings.cache_clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    get_settings.cache_clear()


@pytest.fixture
def make_webhook():
    """Factory for PagerDuty v3 webhook payload dicts."""

    def _make(event_type: str = "incident.triggered", **data_overrides: object) -> dict:
        data: dict = {
            "id": "Q1",
            "type": "incident",
            "html_url": "https://x/Q1",
            "number": 42,
            "title": "DB down",
            "urgency": "high",
            "status": "triggered",
        }
        if event_type in ("incident.acknowledged", "incident.reassigned"):
            data["assignees"] = [{"summary": "Alice"}, {"summary": "Bob"}]
        data.update(data_overrides)
        return {
            "event": {
                "id": "01EVENT",
                "resource_type": "incident",
                "event_type": event_type,
                "occurred_at": "2026-10-19T10:00:00Z",
                "agent": {"summary": "Carol"},
                "data": data,
            }
        }

    return _make
