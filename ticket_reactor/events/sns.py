from __future__ import annotations

import json
from typing import Any, Mapping
from urllib.parse import urlparse

from pydantic import ValidationError

from .schemas import EventEnvelope, EventPayloadError

NOTIFICATION = "Notification"
SUBSCRIPTION_CONFIRMATION = "SubscriptionConfirmation"
UNSUBSCRIBE_CONFIRMATION = "UnsubscribeConfirmation"


def decode_sns_body(raw: bytes) -> Mapping[str, Any]:
    """Decode an SNS HTTP delivery; SNS posts JSON as ``text/plain``."""

    try:
        payload = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise EventPayloadError(f"SNS body is not valid JSON: {exc}") from exc
    if not isinstance(payload, Mapping):
        raise EventPayloadError("SNS body must be a JSON object")
    return payload


def parse_envelope(message: str | Mapping[str, Any]) -> EventEnvelope:
    """Decode one event envelope from a JSON string or an already decoded mapping."""

    if isinstance(message, str):
        try:
            message = json.loads(message)
        except json.JSONDecodeError as exc:
            raise EventPayloadError(f"Event message is not valid JSON: {exc.msg}") from exc
    if not isinstance(message, Mapping):
        raise EventPayloadError("Event message must be a JSON object")
    try:
        return EventEnvelope.model_validate(message)
    except ValidationError as exc:
        raise EventPayloadError(f"Invalid event envelope: {exc}") from exc


def subscription_confirmation_url(payload: Mapping[str, Any]) -> str | None:
    """Return the ``SubscribeURL`` of a subscription confirmation, ``None`` for other messages.

    Only HTTPS URLs on an ``sns.*.amazonaws.com`` host are accepted.
    """

    if payload.get("Type") != SUBSCRIPTION_CONFIRMATION:
        return None
    url = payload.get("SubscribeURL")
    if not isinstance(url, str):
        raise EventPayloadError("SNS subscription confirmation has no 'SubscribeURL'")
    parsed = urlparse(url)
    host = parsed.hostname or ""
    if parsed.scheme != "https" or not (host.startswith("sns.") and host.endswith(".amazonaws.com")):
        raise EventPayloadError(f"Refusing to confirm subscription via {url!r}")
    return url


def parse_sns_notification(payload: Mapping[str, Any]) -> list[EventEnvelope]:
    """Extract event envelopes from an SNS notification.

    Accepts both a single HTTP notification (``{"Type": "Notification",
    "Message": ...}``) and a Lambda style batch (``{"Records": [{"Sns": ...}]}``).
    Unsubscribe confirmations carry no events.
    """

    records = payload.get("Records")
    if records is None:
        if payload.get("Type") == UNSUBSCRIBE_CONFIRMATION:
            return []
        return [parse_envelope(_message_of(payload))]
    if not isinstance(records, list):
        raise EventPayloadError("SNS 'Records' must be a list")

    envelopes: list[EventEnvelope] = []
    for record in records:
        sns = record.get("Sns") if isinstance(record, Mapping) else None
        if not isinstance(sns, Mapping):
            raise EventPayloadError("SNS record is missing the 'Sns' section")
        envelopes.append(parse_envelope(_message_of(sns)))
    return envelopes


def _message_of(notification: Mapping[str, Any]) -> str | Mapping[str, Any]:
    message_type = notification.get("Type", NOTIFICATION)
    if message_type != NOTIFICATION:
        raise EventPayloadError(f"Unsupported SNS message type: {message_type}")
    message = notification.get("Message")
    if message is None:
        raise EventPayloadError("SNS notification has no 'Message'")
    return message
