"""Decode raw webhook bodies into :class:`AlertBatch` values."""

from __future__ import annotations

import json

from pydantic import ValidationError

from src.alerts.exceptions import DecodeError
from src.alerts.types import AlertBatch


def _describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)


def decode_alert_batch(raw: bytes | str) -> AlertBatch:
    """Parse an Alertmanager webhook body.

    Args:
        raw: The request body as received.

    Returns:
        The decoded batch. Absent fields hold empty values.

    Raises:
        DecodeError: If the body is not JSON, is not a JSON object, or a field
            has an incompatible type.
    """
    try:
        payload = json.loads(raw)
    except ValueError as exc:
        raise DecodeError(f"invalid JSON: {exc}") from exc

    if not isinstance(payload, dict):
        raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")

    try:
        return AlertBatch.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(
            f"unexpected alert batch shape: {_describe_validation_error(exc)}"
        ) from exc
