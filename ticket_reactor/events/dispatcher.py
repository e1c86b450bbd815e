from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable

from pydantic import BaseModel, ValidationError

from .schemas import EventEnvelope, EventPayloadError

logger = logging.getLogger(__name__)

EventHandler = Callable[[Any], Awaitable[None]]


@dataclass(slots=True)
class _Route:
    body_model: type[BaseModel]
    handler: EventHandler


@dataclass(slots=True)
class EventDispatcher:
    """Route event envelopes by name to the handler registered for them."""

    _routes: dict[str, _Route] = field(default_factory=dict)

    def register(self, event_name: str, body_model: type[BaseModel], handler: EventHandler) -> None:
        if event_name in self._routes:
            raise ValueError(f"Handler for '{event_name}' already registered")
        self._routes[event_name] = _Route(body_model=body_model, handler=handler)

    async def dispatch(self, envelope: EventEnvelope) -> bool:
        """Run the handler for ``envelope``; return ``False`` when none is registered."""

        route = self._routes.get(envelope.event_name)
        if route is None:
            logger.debug("No handler for event %s", envelope.event_name)
            return False

        try:
            body = route.body_model.model_validate(envelope.body)
        except ValidationError as exc:
            raise EventPayloadError(f"Invalid '{envelope.event_name}' payload: {exc}") from exc

        logger.debug("Dispatching event %s", envelope.event_name)
        await route.handler(body)
        return True

    async def dispatch_many(self, envelopes: Iterable[EventEnvelope]) -> int:
        handled = 0
        for envelope in envelopes:
            if await self.dispatch(envelope):
                handled += 1
        return handled
