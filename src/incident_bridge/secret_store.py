"""AWS Secrets Manager access for bridge credentials."""

import json
import logging

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from incident_bridge.errors import ConfigurationError

logger = logging.getLogger(__name__)


def fetch_secret_payload(secret_id: str, region: str | None = None) -> dict[str, str]:
    """Fetch a JSON object secret from AWS Secrets Manager.

    Raises ConfigurationError when the secret cannot be read or is not a
    JSON object. The secret value itself is never logged.
    """
    client = boto3.client(
        "secretsmanager",
        region_name=region,
        config=Config(retries={"max_attempts": 3, "mode": "standard"}),
    )
    try:
        response = client.get_secret_value(SecretId=secret_id)
    except (BotoCoreError, ClientError) as exc:
        logger.error("Failed to read secret %s", secret_id, exc_info=True)
        raise ConfigurationError(f"Unable to read secret {secret_id}") from exc

    try:
        payload = json.loads(response.get("SecretString") or "{}")
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Secret {secret_id} is not valid JSON") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Secret {secret_id} must be a JSON object")
    return payload
