"""Card builder — turns an Alertmanager batch into a Teams MessageCard."""

from __future__ import annotations

from src.alerts.types import Alert, AlertBatch, AlertStatus
from src.teams.card import Fact, NotificationCard, Section

COLOR_RESOLVED = "2DC72D"  # green
COLOR_FIRING = "8C1A1A"    # red
COLOR_UNKNOWN = "CCCCCC"   # grey

_THEME_COLORS: dict[str, str] = {
    AlertStatus.RESOLVED: COLOR_RESOLVED,
    AlertStatus.FIRING: COLOR_FIRING,
}


def status_color(status: str) -> str:
    """Theme colour for a batch status; unknown and empty map to grey."""
    return _THEME_COLORS.get(status, COLOR_UNKNOWN)


def card_title(status: str) -> str:
    return f"Prometheus Alert ({status})"


def build_facts(alert: Alert) -> list[Fact]:
    """Annotations first, then labels, one fact per entry."""
    facts = [Fact(name=k, value=v) for k, v in alert.annotations.items()]
    facts.extend(Fact(name=k, value=v) for k, v in alert.labels.items())
    return facts


def build_section(alert: Alert, external_url: str, markdown_enabled: bool) -> Section:
    return Section(
        activity_title=f"[{alert.description}]({external_url})",
        facts=build_facts(alert),
        markdown=markdown_enabled,
    )


def build_card(batch: AlertBatch, markdown_enabled: bool) -> NotificationCard:
    """Build the MessageCard for one alert batch.

    Never raises: absent fields render as empty strings.

    Args:
        batch: Decoded Alertmanager batch.
        markdown_enabled: Value of ``markdown`` on every section.

    Returns:
        A card with one section per alert, in alert order.
    """
    return NotificationCard(
        theme_color=status_color(batch.status),
        summary=batch.common_annotations.get("summary", ""),
        title=card_title(batch.status),
        sections=[
            build_section(alert, batch.external_url, markdown_enabled)
            for alert in batch.alerts
        ],
    )
