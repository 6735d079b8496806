"""Application configuration via pydantic-settings."""

import logging
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from incident_bridge.errors import ConfigurationError
from incident_bridge.secret_store import fetch_secret_payload

logger = logging.getLogger(__name__)

# Secret store key -> Settings field used when no secret store is configured
CREDENTIAL_KEYS: dict[str, str] = {
    "SLACK_SIGNING_SECRET": "slack_signing_secret",
    "SLACK_BOT_TOKEN": "slack_bot_token",
    "PAGER_DUTY_SIGNING_KEY": "pagerduty_signing_key",
    "PAGER_DUTY_EVENTS_API_KEY": "pagerduty_events_api_key",
    "PAGER_DUTY_REST_API_KEY": "pagerduty_rest_api_key",
}


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Secret store
    secrets_manager_secret_id: str = ""
    aws_region: str = ""

    # Slack
    slack_signing_secret: str = ""
    slack_bot_token: str = ""
    slack_command: str = "/pd-trigger"
    slack_ping_phrase: str = "ping-bot"
    diagnostic_channel: str = "pagerduty-testing"

    # PagerDuty
    pagerduty_signing_key: str = ""
    pagerduty_events_api_key: str = ""
    pagerduty_rest_api_key: str = ""
    pagerduty_rest_url: str = "https://api.pagerduty.com"
    pagerduty_events_url: str = "https://events.pagerduty.com/v2/enqueue"
    http_timeout_seconds: float = 10.0

    # App
    environment: str = "development"
    log_level: str = "INFO"


class Credentials(BaseModel):
    """Signing secrets, API keys and command phrases, fixed for the process lifetime."""

    model_config = ConfigDict(frozen=True)

    slack_signing_secret: SecretStr
    slack_bot_token: SecretStr
    pagerduty_signing_key: SecretStr
    pagerduty_events_api_key: SecretStr
    pagerduty_rest_api_key: SecretStr
    slack_command: str
    ping_phrase: str
    diagnostic_channel: str


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings. Lazy initialization to avoid import-time errors."""
    return Settings()


def load_credentials(settings: Settings) -> Credentials:
    """Build the process credential set.

    Reads the five required credentials from AWS Secrets Manager when
    ``secrets_manager_secret_id`` is set, otherwise from the settings
    themselves. Raises ConfigurationError naming every missing key.
    """
    if settings.secrets_manager_secret_id:
        source = fetch_secret_payload(
            settings.secrets_manager_secret_id, settings.aws_region or None
        )
        logger.info("Loaded credentials from secret store")
    else:
        source = {key: getattr(settings, field) for key, field in CREDENTIAL_KEYS.items()}
        logger.info("Loaded credentials from environment")

    missing = [key for key in CREDENTIAL_KEYS if not source.get(key)]
    if missing:
        raise ConfigurationError(f"Missing secret(s): {', '.join(missing)}")

    return Credentials(
        **{field: SecretStr(str(source[key])) for key, field in CREDENTIAL_KEYS.items()},
        slack_command=settings.slack_command,
        ping_phrase=settings.slack_ping_phrase,
        diagnostic_channel=settings.diagnostic_channel,
    )
