"""Event envelopes, SNS decoding and dispatch."""

from .dispatcher import EventDispatcher
from .handlers import build_dispatcher
from .schemas import TICKET_UPDATED, EventEnvelope, EventPayloadError, TicketUpdatedBody
from .sns import parse_envelope, parse_sns_notification

__all__ = [
    "EventDispatcher",
    "EventEnvelope",
    "EventPayloadError",
    "TICKET_UPDATED",
    "TicketUpdatedBody",
    "build_dispatcher",
    "parse_envelope",
    "parse_sns_notification",
]
