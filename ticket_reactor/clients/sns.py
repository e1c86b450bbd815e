from __future__ import annotations

import logging

import httpx

from ticket_reactor.tickets.errors import TicketReactorError

from .base import JsonApiClient

logger = logging.getLogger(__name__)


class SubscriptionConfirmationError(TicketReactorError):
    """Raised when SNS did not accept a subscription confirmation."""


class SnsSubscriptionConfirmer(JsonApiClient):
    """Confirms SNS HTTP subscriptions by visiting their ``SubscribeURL``."""

    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("base_url", "")
        super().__init__(**kwargs)

    async def confirm(self, subscribe_url: str) -> None:
        try:
            response = await self._request("GET", subscribe_url)
        except httpx.HTTPError as exc:
            raise SubscriptionConfirmationError(f"Subscription confirmation failed: {exc}") from exc
        if response.status_code >= 400:
            raise SubscriptionConfirmationError(
                f"Subscription confirmation rejected with HTTP {response.status_code}"
            )
        logger.info("Confirmed SNS subscription")
