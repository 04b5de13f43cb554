"""Exception hierarchy for inbound alert handling."""

from __future__ import annotations


class AlertError(Exception):
    """Base exception for all inbound alert errors."""


class DecodeError(AlertError):
    """The request body is not valid JSON or not an Alertmanager batch."""
