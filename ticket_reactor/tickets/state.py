from __future__ import annotations

from enum import Enum
from typing import TypeVar, Union


class TicketStatus(str, Enum):
    """Ticket statuses this service reacts to."""

    OPEN = "open"
    RESOLVED = "resolved"


class TicketProgressStage(str, Enum):
    """Completion sub-statuses this service reacts to."""

    IN_PROGRESS = "inProgress"
    DONE = "done"
    CANNOT_DO = "cannotDo"
    CANCELLED = "cancelled"


# Values outside the enums stay as the raw string the ticket core sent.
StatusValue = Union[TicketStatus, str]
ProgressStageValue = Union[TicketProgressStage, str]

SUCCESSFUL_STAGES: frozenset[TicketProgressStage] = frozenset(
    {TicketProgressStage.DONE, TicketProgressStage.CANNOT_DO}
)

_E = TypeVar("_E", bound=Enum)


def known_or_raw(enum_type: type[_E], value: str) -> _E | str:
    """Return the enum member for ``value``, or ``value`` itself when it is unknown."""

    try:
        return enum_type(value)
    except ValueError:
        return value
