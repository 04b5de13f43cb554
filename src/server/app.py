"""Inbound webhook server — receives Alertmanager batches over HTTP.

Runs an ``aiohttp`` web server exposing a single route (default
``/alertmanager``). Each POST runs decode → build → dispatch in sequence.
The caller only ever sees 200, or 400 when the request is rejected before
a card is built; delivery failures are logged and nothing more.
"""

from __future__ import annotations

import asyncio

import structlog
from aiohttp import web

from src.alerts.decoder import decode_alert_batch
from src.alerts.exceptions import DecodeError
from src.teams.builder import build_card
from src.teams.card import NotificationCard
from src.teams.dispatcher import CardDispatcher
from src.teams.exceptions import DeliveryError, TransportError

logger = structlog.get_logger(__name__)

METHOD_NOT_ALLOWED_MESSAGE = "Error: Only accepts POST requests."

DISPATCHER_KEY = web.AppKey("dispatcher", CardDispatcher)
MARKDOWN_KEY = web.AppKey("markdown_enabled", bool)


async def relay_card(dispatcher: CardDispatcher, card: NotificationCard) -> bool:
    """Deliver *card*, logging instead of raising on failure."""
    try:
        await dispatcher.dispatch(card)
    except TransportError as exc:
        logger.error("card_transport_failed", error=str(exc), title=card.title)
        return False
    except DeliveryError as exc:
        logger.error(
            "card_delivery_failed",
            status=exc.status_code,
            reason=exc.reason,
            title=card.title,
        )
        return False
    return True


async def _handle_alertmanager(request: web.Request) -> web.Response:
    if request.method != "POST":
        logger.warning("method_not_allowed", method=request.method, path=request.path)
        return web.Response(status=400, text=METHOD_NOT_ALLOWED_MESSAGE)

    raw = await request.read()
    try:
        batch = decode_alert_batch(raw)
    except DecodeError as exc:
        msg = f"Error: encoding message: {exc}"
        logger.warning("alert_batch_rejected", error=str(exc))
        return web.Response(status=400, text=msg)

    logger.info(
        "alert_batch_received",
        status=batch.status,
        receiver=batch.receiver,
        alerts=len(batch.alerts),
    )
    logger.debug("alert_batch_payload", batch=batch.model_dump(mode="json", by_alias=True))

    card = build_card(batch, request.app[MARKDOWN_KEY])
    logger.debug("card_created", card=card.to_payload())

    # The outbound POST finishes even if the Alertmanager connection drops.
    await asyncio.shield(relay_card(request.app[DISPATCHER_KEY], card))
    return web.Response(status=200)


def create_app(
    dispatcher: CardDispatcher,
    markdown_enabled: bool = False,
    path: str = "/alertmanager",
    max_body_bytes: int = 0,
) -> web.Application:
    """Create the aiohttp web application.

    ``max_body_bytes`` caps the request body; 0 means no limit.
    """
    app = web.Application(client_max_size=max_body_bytes)
    app[DISPATCHER_KEY] = dispatcher
    app[MARKDOWN_KEY] = markdown_enabled
    app.router.add_route("*", path, _handle_alertmanager)
    return app


async def start_server(
    dispatcher: CardDispatcher,
    markdown_enabled: bool = False,
    host: str = "0.0.0.0",
    port: int = 2000,
    path: str = "/alertmanager",
    max_body_bytes: int = 0,
) -> web.AppRunner:
    """Start the webhook server. Returns the runner for cleanup."""
    app = create_app(
        dispatcher,
        markdown_enabled=markdown_enabled,
        path=path,
        max_body_bytes=max_body_bytes,
    )
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()
    return runner
