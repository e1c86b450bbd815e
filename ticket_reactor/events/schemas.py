from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ticket_reactor.tickets.errors import TicketReactorError
from ticket_reactor.tickets.models import PartialTicketSnapshot, TicketSnapshot, TicketTransitionEvent
from ticket_reactor.tickets.state import TicketProgressStage, TicketStatus, known_or_raw

TICKET_UPDATED = "ticketUpdated"


class EventPayloadError(TicketReactorError):
    """Raised when a delivered event cannot be decoded."""


def _stage(value: str | None) -> TicketProgressStage | str | None:
    return known_or_raw(TicketProgressStage, value) if value is not None else None


class EventEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    event_name: str = Field(..., alias="eventName", min_length=1)
    body: dict[str, Any] = Field(default_factory=dict)


class TicketSnapshotModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | int
    status: str
    progress_stage: str | None = Field(default=None, alias="progressStage")
    metadata: dict[str, Any] | None = None

    def to_domain(self) -> TicketSnapshot:
        return TicketSnapshot(
            id=str(self.id),
            status=known_or_raw(TicketStatus, self.status),
            progress_stage=_stage(self.progress_stage),
            metadata=self.metadata or {},
        )


class PartialTicketSnapshotModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | int | None = None
    status: str | None = None
    progress_stage: str | None = Field(default=None, alias="progressStage")

    def to_domain(self) -> PartialTicketSnapshot:
        return PartialTicketSnapshot(
            id=str(self.id) if self.id is not None else None,
            status=known_or_raw(TicketStatus, self.status) if self.status is not None else None,
            progress_stage=_stage(self.progress_stage),
        )


class TicketChangeModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    snapshot: TicketSnapshotModel
    previous_version: PartialTicketSnapshotModel | None = Field(default=None, alias="previousVersion")


class TicketUpdatedBody(BaseModel):
    ticket: TicketChangeModel

    def to_event(self) -> TicketTransitionEvent:
        previous = self.ticket.previous_version or PartialTicketSnapshotModel()
        return TicketTransitionEvent(
            snapshot=self.ticket.snapshot.to_domain(),
            previous_version=previous.to_domain(),
        )
