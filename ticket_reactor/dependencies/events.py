from __future__ import annotations

from fastapi import HTTPException, Request

from ticket_reactor.clients.sns import SnsSubscriptionConfirmer
from ticket_reactor.events.dispatcher import EventDispatcher


async def get_event_dispatcher(request: Request) -> EventDispatcher:
    dispatcher = getattr(request.app.state, "event_dispatcher", None)
    if dispatcher is None:
        raise HTTPException(status_code=503, detail="Event dispatcher is not configured")
    return dispatcher


async def get_subscription_confirmer(request: Request) -> SnsSubscriptionConfirmer:
    confirmer = getattr(request.app.state, "sns_confirmer", None)
    if confirmer is None:
        raise HTTPException(status_code=503, detail="SNS subscription confirmer is not configured")
    return confirmer
