from __future__ import annotations

from enum import Enum

from .models import TicketTransitionEvent
from .state import TicketProgressStage, TicketStatus


def field_changed_to(event: TicketTransitionEvent, field_name: str, value: Enum) -> bool:
    """Return whether ``field_name`` moved to ``value`` on this event.

    A field missing from the previous version counts as changed.
    """

    current = getattr(event.snapshot, field_name)
    previous = getattr(event.previous_version, field_name, None)
    return current == value and previous != value


def status_changed_to(event: TicketTransitionEvent, status: TicketStatus) -> bool:
    return field_changed_to(event, "status", status)


def progress_stage_changed_to(event: TicketTransitionEvent, *stages: TicketProgressStage) -> bool:
    return any(field_changed_to(event, "progress_stage", stage) for stage in stages)
