from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock

import pytest

from ticket_reactor.tickets.errors import TicketNotFoundError
from ticket_reactor.tickets.models import (
    PartialTicketSnapshot,
    TicketRecord,
    TicketSnapshot,
    TicketTransitionEvent,
)
from ticket_reactor.tickets.state import ProgressStageValue, StatusValue, TicketStatus


class FakeTicketStore:
    def __init__(self, tickets: dict[str, dict[str, Any]] | None = None):
        self.tickets = dict(tickets or {})
        self.calls: list[str] = []

    async def get_by_id(self, ticket_id: str) -> TicketRecord:
        self.calls.append(ticket_id)
        if ticket_id not in self.tickets:
            raise TicketNotFoundError(f"Ticket {ticket_id} not found")
        return TicketRecord(id=ticket_id, data=self.tickets[ticket_id])


class FakeSignaler:
    def __init__(self):
        self.signal_success = AsyncMock()
        self.signal_failure = AsyncMock()


def make_event(
    *,
    ticket_id: str = "t-1",
    status: StatusValue = TicketStatus.RESOLVED,
    progress_stage: ProgressStageValue | None = None,
    previous_status: StatusValue | None = None,
    previous_stage: ProgressStageValue | None = None,
) -> TicketTransitionEvent:
    return TicketTransitionEvent(
        snapshot=TicketSnapshot(id=ticket_id, status=status, progress_stage=progress_stage),
        previous_version=PartialTicketSnapshot(status=previous_status, progress_stage=previous_stage),
    )


def ticket_with_token(ticket_id: str, token: str | None, **fields: Any) -> dict[str, Any]:
    metadata: dict[str, Any] = {"input": {"workflowTaskToken": token}} if token else {}
    return {"id": ticket_id, "status": "resolved", "metadata": metadata, **fields}


@pytest.fixture
def signaler() -> FakeSignaler:
    return FakeSignaler()
