"""Logging and tracing setup owned by the application lifespan."""

from __future__ import annotations

import logging
from logging.config import dictConfig

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ticket_reactor.core.config import Settings

SERVICE_LOGGER = "ticket_reactor"
# Request lines of the collaborator clients are noise at INFO.
QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(settings: Settings) -> logging.Logger:
    """Send ``ticket_reactor.*`` records at the configured level; other libraries only warn."""

    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    loggers: dict[str, dict[str, object]] = {
        SERVICE_LOGGER: {"handlers": ["console"], "level": level, "propagate": False},
    }
    for name in QUIET_LOGGERS:
        loggers[name] = {"level": logging.WARNING}

    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"service": {"format": settings.log_format}},
            "handlers": {"console": {"class": "logging.StreamHandler", "formatter": "service"}},
            "loggers": loggers,
            "root": {"handlers": ["console"], "level": logging.WARNING},
        }
    )
    return logging.getLogger(SERVICE_LOGGER)


def build_tracer_provider(settings: Settings) -> TracerProvider | None:
    """Create and install the OTLP tracer provider, or ``None`` when tracing is off.

    The caller owns the provider and must shut it down.
    """

    if not settings.otel_enabled:
        return None

    provider = TracerProvider(
        resource=Resource.create(
            {
                "service.name": settings.otel_service_name,
                "deployment.environment": settings.environment,
            }
        )
    )
    exporter = OTLPSpanExporter(
        endpoint=settings.otel_exporter_otlp_endpoint,
        headers=settings.otel_exporter_otlp_headers or None,
    )
    provider.add_span_processor(BatchSpanProcessor(exporter))
    trace.set_tracer_provider(provider)
    return provider
