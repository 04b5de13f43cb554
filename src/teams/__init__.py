"""Outbound Teams MessageCards — building and delivery."""

from src.teams.builder import (
    COLOR_FIRING,
    COLOR_RESOLVED,
    COLOR_UNKNOWN,
    build_card,
    status_color,
)
from src.teams.card import Fact, NotificationCard, Section
from src.teams.counter import SendCounter
from src.teams.dispatcher import CardDispatcher
from src.teams.exceptions import DeliveryError, TeamsError, TransportError

__all__ = [
    "COLOR_FIRING",
    "COLOR_RESOLVED",
    "COLOR_UNKNOWN",
    "CardDispatcher",
    "DeliveryError",
    "Fact",
    "NotificationCard",
    "Section",
    "SendCounter",
    "TeamsError",
    "TransportError",
    "build_card",
    "status_color",
]
