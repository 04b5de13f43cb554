"""HTTP surface — the Alertmanager webhook receiver."""

from src.server.app import (
    METHOD_NOT_ALLOWED_MESSAGE,
    create_app,
    relay_card,
    start_server,
)

__all__ = [
    "METHOD_NOT_ALLOWED_MESSAGE",
    "create_app",
    "relay_card",
    "start_server",
]
