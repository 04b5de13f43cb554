"""Domain types for Alertmanager webhook payloads.

The schema follows the Alertmanager generic webhook body
(https://prometheus.io/docs/alerting/latest/configuration/#webhook_config).
Parsing is permissive: missing keys and JSON ``null`` fall back to empty
values, and keys we do not know about are ignored.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class AlertStatus(StrEnum):
    """Batch status values Alertmanager sends."""

    FIRING = "firing"
    RESOLVED = "resolved"


def _null_values_to_empty(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: "" if v is None else v for k, v in value.items()}
    return value


class _WebhookModel(BaseModel):
    # Wire names only: snake_case keys are unknown keys and get ignored.
    model_config = ConfigDict(extra="ignore", frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # null behaves like an absent key so the field default applies
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class Alert(_WebhookModel):
    """A single alert inside a batch."""

    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    starts_at: str = Field(default="", alias="startsAt")
    ends_at: str = Field(default="", alias="endsAt")

    @field_validator("labels", "annotations", mode="before")
    @classmethod
    def empty_null_values(cls, value: Any) -> Any:
        return _null_values_to_empty(value)

    @property
    def description(self) -> str:
        return self.annotations.get("description", "")


class AlertBatch(_WebhookModel):
    """One webhook delivery from Alertmanager."""

    version: str = ""
    group_key: str = Field(default="", alias="groupKey")
    status: str = ""
    receiver: str = ""
    group_labels: dict[str, str] = Field(default_factory=dict, alias="groupLabels")
    common_labels: dict[str, str] = Field(default_factory=dict, alias="commonLabels")
    common_annotations: dict[str, str] = Field(
        default_factory=dict, alias="commonAnnotations"
    )
    external_url: str = Field(default="", alias="externalURL")
    alerts: list[Alert] = Field(default_factory=list)

    @field_validator(
        "group_labels", "common_labels", "common_annotations", mode="before"
    )
    @classmethod
    def empty_null_values(cls, value: Any) -> Any:
        return _null_values_to_empty(value)

    @field_validator("alerts", mode="before")
    @classmethod
    def null_alerts_to_empty(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{} if item is None else item for item in value]
        return value
