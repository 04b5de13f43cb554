"""Teams MessageCard document model.

Field reference:
https://learn.microsoft.com/en-us/outlook/actionable-messages/message-card-reference
"""

from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

MESSAGE_CARD_TYPE = "MessageCard"
MESSAGE_CARD_CONTEXT = "http://schema.org/extensions"


class _CardModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class Fact(_CardModel):
    """One name/value row inside a section."""

    name: str
    value: str


class Section(_CardModel):
    """The part of a card describing exactly one alert."""

    activity_title: str = Field(default="", alias="activityTitle")
    facts: list[Fact] = Field(default_factory=list)
    markdown: bool = False


class NotificationCard(_CardModel):
    """A complete MessageCard ready to POST to an incoming webhook."""

    type: str = Field(default=MESSAGE_CARD_TYPE, alias="@type")
    context: str = Field(default=MESSAGE_CARD_CONTEXT, alias="@context")
    theme_color: str = Field(alias="themeColor")
    summary: str = ""
    title: str = ""
    text: str = ""
    sections: list[Section] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Wire representation; ``text`` is left out when empty."""
        payload = self.model_dump(mode="json", by_alias=True)
        if not payload["text"]:
            del payload["text"]
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_payload())
