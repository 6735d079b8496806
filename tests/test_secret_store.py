"""Tests for the AWS Secrets Manager reader."""

import json
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from incident_bridge.errors import ConfigurationError
from incident_bridge.secret_store import fetch_secret_payload


@patch("incident_bridge.secret_store.boto3.client")
def test_fetch_secret_payload_parses_json(mock_boto_client: MagicMock):
    """The SecretString JSON object is returned as a dict."""
    sm = MagicMock()
    sm.get_secret_value.return_value = {"SecretString": json.dumps({"SLACK_BOT_TOKEN": "x"})}
    mock_boto_client.return_value = sm

    payload = fetch_secret_payload("bridge/prod", "us-east-1")

    assert payload == {"SLACK_BOT_TOKEN": "x"}
    sm.get_secret_value.assert_called_once_with(SecretId="bridge/prod")
    assert mock_boto_client.call_args.args == ("secretsmanager",)
    assert mock_boto_client.call_args.kwargs["region_name"] == "us-east-1"


@patch("incident_bridge.secret_store.boto3.client")
def test_fetch_secret_payload_client_error(mock_boto_client: MagicMock):
    """AWS errors become ConfigurationError."""
    sm = MagicMock()
    sm.get_secret_value.side_effect = ClientError(
        {"Error": {"Code": "ResourceNotFoundException", "Message": "nope"}},
        "GetSecretValue",
    )
    mock_boto_client.return_value = sm

    with pytest.raises(ConfigurationError, match="bridge/missing"):
        fetch_secret_payload("bridge/missing")


@patch("incident_bridge.secret_store.boto3.client")
def test_fetch_secret_payload_invalid_json(mock_boto_client: MagicMock):
    """A non-JSON secret string is a configuration error."""
    sm = MagicMock()
    sm.get_secret_value.return_value = {"SecretString": "not json"}
    mock_boto_client.return_value = sm

    with pytest.raises(ConfigurationError, match="not valid JSON"):
        fetch_secret_payload("bridge/prod")


@patch("incident_bridge.secret_store.boto3.client")
def test_fetch_secret_payload_requires_object(mock_boto_client: MagicMock):
    """A JSON array secret is rejected."""
    sm = MagicMock()
    sm.get_secret_value.return_value = {"SecretString": "[1, 2]"}
    mock_boto_client.return_value = sm

    with pytest.raises(ConfigurationError, match="JSON object"):
        fetch_secret_payload("bridge/prod")
