from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import httpx

from ticket_reactor.tickets.errors import SignalError

from .base import JsonApiClient, extract_error_message

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_ERROR = "TicketCancelled"


class HttpWorkflowSignaler(JsonApiClient):
    """Sends task success/failure signals to the workflow engine."""

    def __init__(self, *, failure_error: str = DEFAULT_FAILURE_ERROR, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self._failure_error = failure_error

    async def signal_success(self, *, task_token: str, payload: Mapping[str, Any]) -> None:
        body = {"taskToken": task_token, "output": json.dumps(payload, default=str)}
        await self._send("/tasks/success", body)

    async def signal_failure(self, *, task_token: str, cause: str) -> None:
        body = {"taskToken": task_token, "cause": cause, "error": self._failure_error}
        await self._send("/tasks/failure", body)

    async def _send(self, path: str, body: Mapping[str, Any]) -> None:
        try:
            response = await self._request("POST", path, json=body)
        except httpx.HTTPError as exc:
            raise SignalError(f"Workflow signal request failed: {exc}") from exc

        if response.status_code >= 400:
            message = extract_error_message(response)
            raise SignalError(message, status_code=response.status_code)
        logger.debug("Workflow signal %s accepted", path)
