"""Ticket models and the transition reactor."""

from .errors import SignalError, TicketNotFoundError, TicketReactorError, TicketStoreError
from .models import PartialTicketSnapshot, TicketRecord, TicketSnapshot, TicketTransitionEvent
from .reactor import ReactionOutcome, TicketTransitionReactor
from .state import TicketProgressStage, TicketStatus

__all__ = [
    "PartialTicketSnapshot",
    "ReactionOutcome",
    "SignalError",
    "TicketNotFoundError",
    "TicketProgressStage",
    "TicketReactorError",
    "TicketRecord",
    "TicketSnapshot",
    "TicketStatus",
    "TicketStoreError",
    "TicketTransitionEvent",
    "TicketTransitionReactor",
]
