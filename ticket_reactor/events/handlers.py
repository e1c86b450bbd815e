from __future__ import annotations

from ticket_reactor.tickets.reactor import TicketTransitionReactor

from .dispatcher import EventDispatcher
from .schemas import TICKET_UPDATED, TicketUpdatedBody


def build_dispatcher(reactor: TicketTransitionReactor) -> EventDispatcher:
    """Dispatcher with every event this service reacts to."""

    async def handle_ticket_updated(body: TicketUpdatedBody) -> None:
        await reactor.react(body.to_event())

    dispatcher = EventDispatcher()
    dispatcher.register(TICKET_UPDATED, TicketUpdatedBody, handle_ticket_updated)
    return dispatcher
