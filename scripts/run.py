#!/usr/bin/env python3
"""Relay entrypoint — serves the Alertmanager webhook and forwards to Teams.

Usage::

    # Run with default config
    TEAMS_INCOMING_WEBHOOK_URL=https://... python scripts/run.py

    # Custom config file
    python scripts/run.py --config config/settings.yaml

    # Override log level and listen port
    python scripts/run.py --log-level DEBUG --port 9095
"""

from __future__ import annotations

import argparse
import asyncio
import signal
import sys

import structlog

from src.core.config import load_settings
from src.core.logging import setup_logging
from src.server.app import start_server
from src.teams.dispatcher import CardDispatcher

logger = structlog.get_logger(__name__)


async def run(args: argparse.Namespace) -> int:
    """Start the webhook server and run until interrupted."""
    settings = load_settings(args.config)
    setup_logging(level=args.log_level)

    host = args.host or settings.server.host
    port = args.port or settings.server.port
    webhook_url = settings.teams.webhook_url.get_secret_value()

    logger.info(
        "relay_starting",
        host=host,
        port=port,
        path=settings.server.path,
        markdown_enabled=settings.teams.markdown_enabled,
    )
    if not webhook_url:
        logger.warning("teams_webhook_url_missing")

    dispatcher = CardDispatcher(
        webhook_url,
        timeout_secs=settings.teams.timeout_secs,
    )
    await dispatcher.connect()

    try:
        runner = await start_server(
            dispatcher,
            markdown_enabled=settings.teams.markdown_enabled,
            host=host,
            port=port,
            path=settings.server.path,
            max_body_bytes=settings.server.max_body_bytes,
        )
    except OSError as exc:
        logger.error("relay_bind_failed", host=host, port=port, error=str(exc))
        print(f"Could not listen on {host}:{port}: {exc}", file=sys.stderr)
        await dispatcher.close()
        return 1

    logger.info("relay_running", host=host, port=port)

    # ── Wait for shutdown signal ─────────────────────────────────
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        logger.info("shutdown_signal_received")
        stop_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, _signal_handler)
        except NotImplementedError:
            # Windows: signal handlers not supported on ProactorEventLoop
            pass

    try:
        await stop_event.wait()
    except KeyboardInterrupt:
        logger.info("keyboard_interrupt")

    # ── Graceful shutdown ────────────────────────────────────────
    logger.info("relay_shutting_down")
    await runner.cleanup()
    await dispatcher.close()

    logger.info("relay_stopped", cards_sent_total=dispatcher.counter.value)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Relay Prometheus Alertmanager webhooks to Microsoft Teams.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to settings YAML (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level override: DEBUG, INFO, WARNING, ERROR",
    )
    parser.add_argument("--host", default=None, help="Listen address override")
    parser.add_argument("--port", type=int, default=None, help="Listen port override")
    args = parser.parse_args()

    code = asyncio.run(run(args))
    sys.exit(code)


if __name__ == "__main__":
    main()
