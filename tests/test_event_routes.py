from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from ticket_reactor.api.routes import events as event_routes
from ticket_reactor.clients.sns import SnsSubscriptionConfirmer, SubscriptionConfirmationError
from ticket_reactor.events.dispatcher import EventDispatcher
from ticket_reactor.events.handlers import build_dispatcher
from ticket_reactor.events.schemas import TICKET_UPDATED, EventPayloadError
from ticket_reactor.main import create_app
from ticket_reactor.tickets.errors import SignalError, TicketNotFoundError, TicketStoreError
from ticket_reactor.tickets.reactor import TicketTransitionReactor

from .conftest import FakeTicketStore, ticket_with_token

ENVELOPE = {
    "eventName": TICKET_UPDATED,
    "body": {"ticket": {"snapshot": {"id": "1", "status": "resolved", "progressStage": "done"}}},
}


@pytest.fixture
def sns_confirmer():
    return AsyncMock(spec=SnsSubscriptionConfirmer)


@pytest.fixture
def event_client(sns_confirmer):
    app = create_app()
    dispatcher = AsyncMock(spec=EventDispatcher)

    async def override_dispatcher():
        return dispatcher

    async def override_confirmer():
        return sns_confirmer

    app.dependency_overrides[event_routes.get_event_dispatcher] = override_dispatcher
    app.dependency_overrides[event_routes.get_subscription_confirmer] = override_confirmer
    client = TestClient(app)
    try:
        yield client, dispatcher
    finally:
        app.dependency_overrides.clear()


def test_ping():
    client = TestClient(create_app())
    assert client.get("/ping").json() == {"status": "ok"}


def test_event_is_accepted(event_client):
    client, dispatcher = event_client
    dispatcher.dispatch.return_value = True

    response = client.post("/events", json=ENVELOPE)

    assert response.status_code == 202
    assert response.json() == {"status": "accepted", "handled": 1}
    envelope = dispatcher.dispatch.await_args.args[0]
    assert envelope.event_name == TICKET_UPDATED


def test_missing_event_name_is_unprocessable(event_client):
    client, _ = event_client
    response = client.post("/events", json={"body": {}})
    assert response.status_code == 422


@pytest.mark.parametrize(
    ("error", "status_code"),
    [
        (EventPayloadError("bad body"), 422),
        (TicketNotFoundError("Ticket 1 not found"), 404),
        (TicketStoreError("down", status_code=503), 502),
        (SignalError("Invalid token", status_code=400), 502),
    ],
)
def test_errors_are_visible_to_the_delivery_layer(event_client, error, status_code):
    client, dispatcher = event_client
    dispatcher.dispatch.side_effect = error

    response = client.post("/events", json=ENVELOPE)

    assert response.status_code == status_code
    assert response.json()["detail"] == str(error)


def test_sns_notification_dispatches_each_message(event_client):
    client, dispatcher = event_client
    dispatcher.dispatch_many.return_value = 2
    records = [{"Sns": {"Message": json.dumps(ENVELOPE)}}, {"Sns": {"Message": json.dumps(ENVELOPE)}}]

    response = client.post("/events/sns", json={"Records": records})

    assert response.status_code == 202
    assert response.json()["handled"] == 2
    envelopes = dispatcher.dispatch_many.await_args.args[0]
    assert len(envelopes) == 2


def test_malformed_sns_notification_is_unprocessable(event_client):
    client, dispatcher = event_client

    response = client.post("/events/sns", json={"Type": "Notification", "Message": "{oops"})

    assert response.status_code == 422
    dispatcher.dispatch_many.assert_not_awaited()


def test_unconfigured_dispatcher_returns_503():
    client = TestClient(create_app())
    response = client.post("/events", json=ENVELOPE)
    assert response.status_code == 503


def test_end_to_end_cancellation_through_http(signaler):
    store = FakeTicketStore({"1": ticket_with_token("1", "tok")})
    app = create_app()
    app.state.event_dispatcher = build_dispatcher(
        TicketTransitionReactor(ticket_store=store, signaler=signaler)
    )
    payload = {
        "eventName": TICKET_UPDATED,
        "body": {
            "ticket": {
                "snapshot": {"id": "1", "status": "resolved", "progressStage": "cancelled"},
                "previousVersion": {"status": "open"},
            }
        },
    }

    response = TestClient(app).post("/events", json=payload)

    assert response.status_code == 202
    signaler.signal_failure.assert_awaited_once_with(task_token="tok", cause="Related ticket is canceled")


def _reactor_app(store: FakeTicketStore, signaler) -> TestClient:
    app = create_app()
    app.state.event_dispatcher = build_dispatcher(
        TicketTransitionReactor(ticket_store=store, signaler=signaler)
    )
    app.state.sns_confirmer = AsyncMock(spec=SnsSubscriptionConfirmer)
    return TestClient(app)


def test_unknown_snapshot_status_is_a_no_op(signaler):
    store = FakeTicketStore({"1": ticket_with_token("1", "tok")})
    client = _reactor_app(store, signaler)
    payload = {
        "eventName": TICKET_UPDATED,
        "body": {"ticket": {"snapshot": {"id": "1", "status": "inProgress"}, "previousVersion": {}}},
    }

    response = client.post("/events", json=payload)

    assert response.status_code == 202
    assert store.calls == []
    signaler.signal_success.assert_not_awaited()


def test_unknown_previous_stage_still_resumes_workflow(signaler):
    record = ticket_with_token("1", "tok")
    client = _reactor_app(FakeTicketStore({"1": record}), signaler)
    payload = {
        "eventName": TICKET_UPDATED,
        "body": {
            "ticket": {
                "snapshot": {"id": "1", "status": "resolved", "progressStage": "done"},
                "previousVersion": {"progressStage": "onHold"},
            }
        },
    }

    response = client.post("/events", json=payload)

    assert response.status_code == 202
    signaler.signal_success.assert_awaited_once_with(task_token="tok", payload=record)


def test_sns_plain_text_delivery_is_processed(signaler):
    client = _reactor_app(FakeTicketStore({"1": ticket_with_token("1", "tok")}), signaler)
    envelope = {
        "eventName": TICKET_UPDATED,
        "body": {"ticket": {"snapshot": {"id": "1", "status": "resolved", "progressStage": "cancelled"}}},
    }
    notification = {"Type": "Notification", "MessageId": "m-1", "Message": json.dumps(envelope)}

    response = client.post(
        "/events/sns",
        content=json.dumps(notification),
        headers={"Content-Type": "text/plain; charset=UTF-8"},
    )

    assert response.status_code == 202
    assert response.json()["handled"] == 1
    signaler.signal_failure.assert_awaited_once_with(task_token="tok", cause="Related ticket is canceled")


def test_sns_subscription_confirmation_visits_subscribe_url(event_client, sns_confirmer):
    client, dispatcher = event_client
    url = "https://sns.eu-west-1.amazonaws.com/?Action=ConfirmSubscription&Token=abc"
    body = {"Type": "SubscriptionConfirmation", "SubscribeURL": url, "Token": "abc"}

    response = client.post(
        "/events/sns",
        content=json.dumps(body),
        headers={"Content-Type": "text/plain; charset=UTF-8"},
    )

    assert response.status_code == 202
    assert response.json()["handled"] == 0
    sns_confirmer.confirm.assert_awaited_once_with(url)
    dispatcher.dispatch_many.assert_not_awaited()


def test_sns_subscription_confirmation_rejects_foreign_hosts(event_client, sns_confirmer):
    client, _ = event_client
    body = {"Type": "SubscriptionConfirmation", "SubscribeURL": "https://evil.example.com/confirm"}

    response = client.post("/events/sns", content=json.dumps(body))

    assert response.status_code == 422
    sns_confirmer.confirm.assert_not_awaited()


def test_sns_subscription_confirmation_failure_is_bad_gateway(event_client, sns_confirmer):
    client, _ = event_client
    sns_confirmer.confirm.side_effect = SubscriptionConfirmationError("rejected")
    body = {
        "Type": "SubscriptionConfirmation",
        "SubscribeURL": "https://sns.us-east-1.amazonaws.com/?Action=ConfirmSubscription",
    }

    response = client.post("/events/sns", content=json.dumps(body))

    assert response.status_code == 502
