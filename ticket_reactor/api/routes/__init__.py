"""API route modules."""

from . import events, ping

__all__ = ["events", "ping"]
