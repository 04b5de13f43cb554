"""Tests for CardDispatcher — wire request, status handling, counter, lifecycle."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from src.teams.card import Fact, NotificationCard, Section
from src.teams.counter import SendCounter
from src.teams.dispatcher import CardDispatcher
from src.teams.exceptions import DeliveryError, TeamsError, TransportError

_ENDPOINT = "https://example.webhook.office.com/webhookb2/fake"

# ── Helpers ─────────────────────────────────────────────────────


def _card(**kw: object) -> NotificationCard:
    defaults: dict[str, object] = {
        "theme_color": "8C1A1A",
        "summary": "Disk almost full",
        "title": "Prometheus Alert (firing)",
        "sections": [
            Section(
                activity_title="[disk at 95%](http://am)",
                facts=[Fact(name="instance", value="db-1")],
                markdown=False,
            ),
        ],
    }
    defaults.update(kw)
    return NotificationCard(**defaults)  # type: ignore[arg-type]


class _Recorder:
    """MockTransport handler that records requests and returns a fixed status."""

    def __init__(self, status: int = 200) -> None:
        self.status = status
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status, text="1")


def _dispatcher(handler: object, counter: SendCounter | None = None) -> CardDispatcher:
    return CardDispatcher(
        _ENDPOINT,
        counter=counter,
        transport=httpx.MockTransport(handler),  # type: ignore[arg-type]
    )


# ── Request shape ───────────────────────────────────────────────


class TestRequest:
    async def test_posts_json_to_endpoint(self) -> None:
        rec = _Recorder()
        disp = _dispatcher(rec)
        await disp.dispatch(_card())
        await disp.close()

        assert len(rec.requests) == 1
        req = rec.requests[0]
        assert req.method == "POST"
        assert str(req.url) == _ENDPOINT
        assert req.headers["content-type"] == "application/json"

    async def test_body_is_card_payload(self) -> None:
        rec = _Recorder()
        disp = _dispatcher(rec)
        card = _card()
        await disp.dispatch(card)
        await disp.close()

        body = json.loads(rec.requests[0].content)
        assert body == card.to_payload()
        assert body["@type"] == "MessageCard"
        assert body["sections"][0]["activityTitle"] == "[disk at 95%](http://am)"
        assert "text" not in body


# ── Response handling ───────────────────────────────────────────


class TestResponses:
    async def test_success_increments_counter(self) -> None:
        disp = _dispatcher(_Recorder(200))
        await disp.dispatch(_card())
        assert disp.counter.value == 1
        await disp.dispatch(_card())
        assert disp.counter.value == 2
        await disp.close()

    async def test_non_200_raises_delivery_error(self) -> None:
        disp = _dispatcher(_Recorder(400))
        with pytest.raises(DeliveryError, match="400 Bad Request") as exc_info:
            await disp.dispatch(_card())
        assert exc_info.value.status_code == 400
        assert exc_info.value.reason == "Bad Request"
        assert disp.counter.value == 0
        await disp.close()

    async def test_other_2xx_is_still_a_failure(self) -> None:
        disp = _dispatcher(_Recorder(202))
        with pytest.raises(DeliveryError) as exc_info:
            await disp.dispatch(_card())
        assert exc_info.value.status_code == 202
        assert disp.counter.value == 0
        await disp.close()

    async def test_server_error(self) -> None:
        disp = _dispatcher(_Recorder(503))
        with pytest.raises(DeliveryError, match="503"):
            await disp.dispatch(_card())
        await disp.close()

    async def test_connection_failure_raises_transport_error(self) -> None:
        def _refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        disp = _dispatcher(_refuse)
        with pytest.raises(TransportError, match="connection refused"):
            await disp.dispatch(_card())
        assert disp.counter.value == 0
        await disp.close()

    async def test_timeout_raises_transport_error(self) -> None:
        def _slow(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        disp = _dispatcher(_slow)
        with pytest.raises(TransportError):
            await disp.dispatch(_card())
        await disp.close()

    async def test_missing_endpoint_raises_transport_error(self) -> None:
        disp = CardDispatcher("")
        with pytest.raises(TransportError):
            await disp.dispatch(_card())
        await disp.close()

    async def test_errors_share_base(self) -> None:
        disp = _dispatcher(_Recorder(500))
        with pytest.raises(TeamsError):
            await disp.dispatch(_card())
        await disp.close()

    async def test_not_retried(self) -> None:
        rec = _Recorder(500)
        disp = _dispatcher(rec)
        with pytest.raises(DeliveryError):
            await disp.dispatch(_card())
        assert len(rec.requests) == 1
        await disp.close()


# ── Counter under concurrency ───────────────────────────────────


class TestConcurrency:
    async def test_concurrent_dispatches_counted_once_each(self) -> None:
        counter = SendCounter()
        disp = _dispatcher(_Recorder(200), counter=counter)
        await asyncio.gather(*(disp.dispatch(_card()) for _ in range(50)))
        assert counter.value == 50
        await disp.close()

    async def test_shared_counter_across_dispatchers(self) -> None:
        counter = SendCounter()
        first = _dispatcher(_Recorder(200), counter=counter)
        second = _dispatcher(_Recorder(200), counter=counter)
        await asyncio.gather(first.dispatch(_card()), second.dispatch(_card()))
        assert counter.value == 2
        await first.close()
        await second.close()


# ── Lifecycle ───────────────────────────────────────────────────


class TestLifecycle:
    async def test_connect_and_close(self) -> None:
        disp = _dispatcher(_Recorder())
        assert not disp.connected
        await disp.connect()
        assert disp.connected
        await disp.close()
        assert not disp.connected

    async def test_close_when_never_connected(self) -> None:
        disp = _dispatcher(_Recorder())
        await disp.close()  # should not raise

    async def test_lazy_client_creation(self) -> None:
        disp = _dispatcher(_Recorder())
        await disp.dispatch(_card())
        assert disp.connected
        await disp.close()
