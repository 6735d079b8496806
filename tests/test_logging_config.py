"""Tests for the JSON logging configuration."""

from incident_bridge.logging_config import build_logging_config


def test_build_logging_config_sets_level():
    """The root level follows the configured level, case-insensitively."""
    config = build_logging_config("debug")
    assert config["root"]["level"] == "DEBUG"
    assert config["root"]["handlers"] == ["stdout"]


def test_build_logging_config_tags_service():
    """Every record carries the service name and renamed level field."""
    formatter = build_logging_config()["formatters"]["json"]
    assert formatter["()"] == "pythonjsonlogger.json.JsonFormatter"
    assert formatter["static_fields"] == {"service": "incident-bridge"}
    assert formatter["rename_fields"]["levelname"] == "severity"
