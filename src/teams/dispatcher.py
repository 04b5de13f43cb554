"""Card dispatcher — delivers MessageCards to a Teams incoming webhook."""

from __future__ import annotations

import httpx
import structlog

from src.teams.card import NotificationCard
from src.teams.counter import SendCounter
from src.teams.exceptions import DeliveryError, TransportError

logger = structlog.get_logger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


class CardDispatcher:
    """POSTs cards to one webhook endpoint, one attempt per card.

    Failures are raised to the caller and never retried. Each 200 response
    bumps the shared :class:`SendCounter`.
    """

    def __init__(
        self,
        endpoint: str,
        counter: SendCounter | None = None,
        timeout_secs: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._counter = counter or SendCounter()
        self._timeout = httpx.Timeout(timeout_secs)
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    @property
    def counter(self) -> SendCounter:
        return self._counter

    @property
    def connected(self) -> bool:
        """Whether the HTTP client is active."""
        return self._http is not None and not self._http.is_closed

    async def connect(self) -> None:
        """Create the httpx async client."""
        self._get_client()

    async def close(self) -> None:
        """Close the httpx async client."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            )
        return self._http

    async def dispatch(self, card: NotificationCard) -> None:
        """Send *card* to the configured endpoint.

        Raises:
            TransportError: The request could not be sent.
            DeliveryError: The endpoint answered with a non-200 status.
        """
        body = card.to_json()
        try:
            response = await self._get_client().post(
                self._endpoint, content=body, headers=_JSON_HEADERS
            )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            raise TransportError(f"card delivery request failed: {exc}") from exc

        if response.status_code != httpx.codes.OK:
            raise DeliveryError(response.status_code, response.reason_phrase)

        total = self._counter.increment()
        logger.info("card_sent", title=card.title, cards_sent_total=total)
