from __future__ import annotations

import logging
from typing import Any, Mapping
from urllib.parse import quote

import httpx

from ticket_reactor.tickets.errors import TicketNotFoundError, TicketStoreError
from ticket_reactor.tickets.models import TicketRecord

from .base import JsonApiClient, extract_error_message

logger = logging.getLogger(__name__)


class HttpTicketStore(JsonApiClient):
    """Ticket store backed by the ticket core HTTP API."""

    async def get_by_id(self, ticket_id: str) -> TicketRecord:
        path = f"/tickets/{quote(str(ticket_id), safe='')}"
        try:
            response = await self._request("GET", path)
        except httpx.HTTPError as exc:
            raise TicketStoreError(f"Ticket store request failed: {exc}") from exc

        if response.status_code == 404:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found", status_code=404)
        if response.status_code >= 400:
            message = extract_error_message(response)
            raise TicketStoreError(message, status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as exc:
            raise TicketStoreError("Ticket store returned a non-JSON body") from exc

        ticket = _unwrap_ticket(body)
        if ticket is None:
            raise TicketStoreError(f"Unexpected ticket payload for {ticket_id}")
        logger.debug("Fetched ticket %s", ticket_id)
        return TicketRecord(id=str(ticket.get("id", ticket_id)), data=ticket)


def _unwrap_ticket(body: Any) -> Mapping[str, Any] | None:
    if not isinstance(body, Mapping):
        return None
    ticket = body.get("ticket", body)
    return dict(ticket) if isinstance(ticket, Mapping) else None
