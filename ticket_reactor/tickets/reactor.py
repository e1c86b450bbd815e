from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from opentelemetry import trace

from .models import TicketTransitionEvent
from .ports import TicketStore, WorkflowSignaler
from .state import SUCCESSFUL_STAGES, TicketProgressStage, TicketStatus
from .transitions import progress_stage_changed_to, status_changed_to

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CANCELLED_CAUSE = "Related ticket is canceled"


class ReactionOutcome(str, Enum):
    """What a single reaction ended up doing."""

    NOT_RESOLVED = "not_resolved"
    NO_TOKEN = "no_token"
    FAILURE_SIGNALLED = "failure_signalled"
    SUCCESS_SIGNALLED = "success_signalled"
    NO_SIGNAL = "no_signal"


@dataclass(slots=True)
class TicketTransitionReactor:
    """Resume or cancel the workflow waiting on a ticket once it gets resolved.

    The reactor performs at most one ticket fetch and at most one signal per
    event. Store and signaler failures propagate to the caller so the event
    delivery layer can decide about redelivery.
    """

    ticket_store: TicketStore
    signaler: WorkflowSignaler

    async def react(self, event: TicketTransitionEvent) -> None:
        ticket_id = event.snapshot.id
        with tracer.start_as_current_span("ticket_reactor.react") as span:
            span.set_attribute("ticket.id", ticket_id)
            outcome = await self._react(event)
            span.set_attribute("ticket_reactor.outcome", outcome.value)
        logger.debug("Ticket %s reaction finished: %s", ticket_id, outcome.value)

    async def _react(self, event: TicketTransitionEvent) -> ReactionOutcome:
        logger.debug("Handling ticket update: %s", event)
        if not status_changed_to(event, TicketStatus.RESOLVED):
            return ReactionOutcome.NOT_RESOLVED

        record = await self.ticket_store.get_by_id(event.snapshot.id)
        task_token = record.workflow_task_token
        if task_token is None:
            return ReactionOutcome.NO_TOKEN

        if progress_stage_changed_to(event, TicketProgressStage.CANCELLED):
            logger.info("Cancelling workflow process of ticket #%s", record.id)
            await self.signaler.signal_failure(task_token=task_token, cause=CANCELLED_CAUSE)
            return ReactionOutcome.FAILURE_SIGNALLED

        if progress_stage_changed_to(event, *SUCCESSFUL_STAGES):
            logger.info("Continuing workflow process of ticket #%s", record.id)
            await self.signaler.signal_success(task_token=task_token, payload=record.data)
            return ReactionOutcome.SUCCESS_SIGNALLED

        return ReactionOutcome.NO_SIGNAL
