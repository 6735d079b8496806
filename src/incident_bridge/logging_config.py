"""Structured JSON logging configuration.

Emits one JSON object per line on stdout, which CloudWatch and most log
shippers index without extra parsing.

Usage:
    from incident_bridge.logging_config import configure_logging
    configure_logging("INFO")
"""

import logging.config

SERVICE_NAME = "incident-bridge"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(funcName)s %(message)s"


def build_logging_config(level: str = "INFO", service: str = SERVICE_NAME) -> dict:
    """Return a ``dictConfig`` mapping that routes the root logger to JSON on stdout."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": LOG_FORMAT,
                "rename_fields": {"levelname": "severity", "asctime": "timestamp", "name": "logger"},
                "static_fields": {"service": service},
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "stream": "ext://sys.stdout",
            },
        },
        "root": {"level": level.upper(), "handlers": ["stdout"]},
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply structured JSON logging at the given root level.

    Call once at application startup (in the FastAPI lifespan).
    """
    logging.config.dictConfig(build_logging_config(level))
