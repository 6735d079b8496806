"""PagerDuty <-> Slack incident notification bridge."""

__version__ = "0.1.0"
