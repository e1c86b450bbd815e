from __future__ import annotations

from typing import Any, Mapping, Protocol

from .models import TicketRecord


class TicketStore(Protocol):
    async def get_by_id(self, ticket_id: str) -> TicketRecord:
        """Return the current record or raise ``TicketNotFoundError``."""


class WorkflowSignaler(Protocol):
    async def signal_success(self, *, task_token: str, payload: Mapping[str, Any]) -> None:
        """Resume the suspended execution with a result payload."""

    async def signal_failure(self, *, task_token: str, cause: str) -> None:
        """Fail the suspended execution with the given cause."""
