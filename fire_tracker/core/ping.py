"""Ping utility used by the API health-check."""

SERVICE_NAME = "fire-tracker"


def get_ping_message() -> str:
    """Return a static ping message."""
    return "pong"
