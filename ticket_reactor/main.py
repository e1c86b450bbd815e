from contextlib import asynccontextmanager

from fastapi import FastAPI

from ticket_reactor.api.routes import events, ping
from ticket_reactor.clients import HttpTicketStore, HttpWorkflowSignaler, SnsSubscriptionConfirmer
from ticket_reactor.core.config import get_settings
from ticket_reactor.core.logging import build_tracer_provider, configure_logging
from ticket_reactor.events.handlers import build_dispatcher
from ticket_reactor.tickets.reactor import TicketTransitionReactor


@asynccontextmanager
async def lifespan(app: FastAPI):  # pragma: no cover - executed by framework
    settings = get_settings()
    logger = configure_logging(settings)
    tracer_provider = build_tracer_provider(settings)

    ticket_store = HttpTicketStore(
        base_url=settings.tickets_api_url,
        token=settings.tickets_api_token,
        timeout_seconds=settings.http_timeout_seconds,
    )
    signaler = HttpWorkflowSignaler(
        base_url=settings.workflow_api_url,
        token=settings.workflow_api_token,
        timeout_seconds=settings.http_timeout_seconds,
    )
    sns_confirmer = SnsSubscriptionConfirmer(timeout_seconds=settings.http_timeout_seconds)
    reactor = TicketTransitionReactor(ticket_store=ticket_store, signaler=signaler)

    app.state.event_dispatcher = build_dispatcher(reactor)
    app.state.sns_confirmer = sns_confirmer
    logger.info("%s started (%s)", settings.app_name, settings.environment)
    try:
        yield
    finally:
        await ticket_store.close()
        await signaler.close()
        await sns_confirmer.close()
        if tracer_provider is not None:
            tracer_provider.shutdown()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.include_router(ping.router)
    app.include_router(events.router)
    return app


app = create_app()
