"""Exception hierarchy for Teams card delivery."""

from __future__ import annotations


class TeamsError(Exception):
    """Base exception for all outbound delivery errors."""


class TransportError(TeamsError):
    """The card could not be sent (connection failure, timeout, bad URL)."""


class DeliveryError(TeamsError):
    """Teams answered with something other than 200 OK."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Error: {status_code} {reason}".rstrip())
