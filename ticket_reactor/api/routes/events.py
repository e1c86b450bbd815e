from __future__ import annotations

import logging
from typing import Annotated, Any, Awaitable

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import BaseModel

from ticket_reactor.clients.sns import SnsSubscriptionConfirmer, SubscriptionConfirmationError
from ticket_reactor.dependencies.events import get_event_dispatcher, get_subscription_confirmer
from ticket_reactor.events.dispatcher import EventDispatcher
from ticket_reactor.events.schemas import EventEnvelope, EventPayloadError
from ticket_reactor.events.sns import decode_sns_body, parse_sns_notification, subscription_confirmation_url
from ticket_reactor.tickets.errors import SignalError, TicketNotFoundError, TicketStoreError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/events", tags=["events"])


class EventAcceptedResponse(BaseModel):
    status: str = "accepted"
    handled: int


EventDispatcherDep = Annotated[EventDispatcher, Depends(get_event_dispatcher)]
ConfirmerDep = Annotated[SnsSubscriptionConfirmer, Depends(get_subscription_confirmer)]


async def _run(operation: Awaitable[Any]) -> Any:
    try:
        return await operation
    except EventPayloadError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    except TicketNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except (TicketStoreError, SignalError, SubscriptionConfirmationError) as exc:
        logger.error("Event processing failed: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc)) from exc


@router.post("", response_model=EventAcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def receive_event(envelope: EventEnvelope, dispatcher: EventDispatcherDep) -> EventAcceptedResponse:
    handled = await _run(dispatcher.dispatch(envelope))
    return EventAcceptedResponse(handled=int(handled))


@router.post("/sns", response_model=EventAcceptedResponse, status_code=status.HTTP_202_ACCEPTED)
async def receive_sns_notification(
    request: Request,
    dispatcher: EventDispatcherDep,
    confirmer: ConfirmerDep,
) -> EventAcceptedResponse:
    # SNS delivers JSON as text/plain, so the body is decoded here rather than by FastAPI.
    try:
        payload = decode_sns_body(await request.body())
        subscribe_url = subscription_confirmation_url(payload)
        envelopes = [] if subscribe_url else parse_sns_notification(payload)
    except EventPayloadError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    if subscribe_url:
        await _run(confirmer.confirm(subscribe_url))
        return EventAcceptedResponse(handled=0)

    handled = await _run(dispatcher.dispatch_many(envelopes))
    return EventAcceptedResponse(handled=handled)
