from __future__ import annotations

from typing import Dict

from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.logging import LoggingInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SpanExporter
from opentelemetry.semconv.resource import ResourceAttributes

from giftcards_api.core.settings import Settings

_TRACER_NAME = "giftcards_api"
_provider: TracerProvider | None = None

# Health checks are not traced.
EXCLUDED_URLS = "healthz,readyz"


def parse_otlp_headers(raw: str | None) -> Dict[str, str] | None:
    """Parse ``key=value,key=value`` as used by ``OTEL_EXPORTER_OTLP_HEADERS``."""

    if not raw:
        return None
    headers: Dict[str, str] = {}
    for pair in raw.split(","):
        if "=" not in pair:
            continue
        key, value = pair.split("=", 1)
        headers[key.strip()] = value.strip()
    return headers or None


def build_exporter(settings: Settings) -> SpanExporter:
    if settings.otel_exporter_otlp_endpoint:
        return OTLPSpanExporter(
            endpoint=settings.otel_exporter_otlp_endpoint,
            headers=parse_otlp_headers(settings.otel_exporter_otlp_headers),
        )
    return ConsoleSpanExporter()


def build_resource(settings: Settings, *, service_name: str, service_version: str) -> Resource:
    return Resource.create(
        {
            ResourceAttributes.SERVICE_NAME: service_name,
            ResourceAttributes.SERVICE_VERSION: service_version,
            ResourceAttributes.DEPLOYMENT_ENVIRONMENT: settings.environment,
            "reloadly.environment": "sandbox" if settings.use_reloadly_sandbox else "production",
        }
    )


def configure_tracing(app: FastAPI, settings: Settings, *, service_name: str, service_version: str) -> None:
    """Install the tracer provider once per process and instrument ``app``."""

    global _provider

    if _provider is None:
        _provider = TracerProvider(
            resource=build_resource(settings, service_name=service_name, service_version=service_version)
        )
        _provider.add_span_processor(BatchSpanProcessor(build_exporter(settings)))
        trace.set_tracer_provider(_provider)
        LoggingInstrumentor().instrument(set_logging_format=False)

    FastAPIInstrumentor.instrument_app(app, tracer_provider=_provider, excluded_urls=EXCLUDED_URLS)


def get_tracer() -> trace.Tracer:
    """Tracer used for spans around marketplace work; a no-op until configured."""

    return trace.get_tracer(_TRACER_NAME)


__all__ = [
    "EXCLUDED_URLS",
    "build_exporter",
    "build_resource",
    "configure_tracing",
    "get_tracer",
    "parse_otlp_headers",
]
