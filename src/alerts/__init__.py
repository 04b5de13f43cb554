"""Inbound Alertmanager webhook payloads — types and decoding."""

from src.alerts.decoder import decode_alert_batch
from src.alerts.exceptions import AlertError, DecodeError
from src.alerts.types import Alert, AlertBatch, AlertStatus

__all__ = [
    "Alert",
    "AlertBatch",
    "AlertError",
    "AlertStatus",
    "DecodeError",
    "decode_alert_batch",
]
