from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .state import ProgressStageValue, StatusValue

WORKFLOW_INPUT_KEY = "input"
WORKFLOW_TASK_TOKEN_KEY = "workflowTaskToken"


def workflow_task_token(metadata: Mapping[str, Any] | None) -> str | None:
    """Return the continuation token stored under ``metadata.input``, if any."""

    if not isinstance(metadata, Mapping):
        return None
    workflow_input = metadata.get(WORKFLOW_INPUT_KEY)
    if not isinstance(workflow_input, Mapping):
        return None
    token = workflow_input.get(WORKFLOW_TASK_TOKEN_KEY)
    if not isinstance(token, str) or not token:
        return None
    return token


@dataclass(frozen=True, slots=True)
class TicketSnapshot:
    """Ticket field values as of the event being processed."""

    id: str
    status: StatusValue
    progress_stage: ProgressStageValue | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class PartialTicketSnapshot:
    """Fields of the previous ticket version; ``None`` means no prior value is known."""

    id: str | None = None
    status: StatusValue | None = None
    progress_stage: ProgressStageValue | None = None


@dataclass(frozen=True, slots=True)
class TicketTransitionEvent:
    """A before/after pair describing a single ticket change."""

    snapshot: TicketSnapshot
    previous_version: PartialTicketSnapshot = field(default_factory=PartialTicketSnapshot)


@dataclass(frozen=True, slots=True)
class TicketRecord:
    """Authoritative ticket record as returned by the ticket store.

    ``data`` keeps the full payload so it can be forwarded untouched.
    """

    id: str
    data: Mapping[str, Any]

    @property
    def metadata(self) -> Mapping[str, Any]:
        metadata = self.data.get("metadata")
        return metadata if isinstance(metadata, Mapping) else {}

    @property
    def workflow_task_token(self) -> str | None:
        return workflow_task_token(self.metadata)
