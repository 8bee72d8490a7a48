from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from giftcards_api.observability.tracing import build_exporter, build_resource, parse_otlp_headers

from reloadly_fakes import build_settings


def test_parse_otlp_headers_skips_malformed_pairs() -> None:
    assert parse_otlp_headers("api-key=abc, x-team = rewards,broken") == {"api-key": "abc", "x-team": "rewards"}
    assert parse_otlp_headers("broken") is None
    assert parse_otlp_headers(None) is None


def test_exporter_follows_configured_endpoint() -> None:
    assert isinstance(build_exporter(build_settings()), ConsoleSpanExporter)
    assert isinstance(
        build_exporter(build_settings(otel_exporter_otlp_endpoint="http://collector:4318/v1/traces")),
        OTLPSpanExporter,
    )


def test_resource_records_reloadly_environment() -> None:
    resource = build_resource(
        build_settings(use_reloadly_sandbox=True),
        service_name="giftcards-api",
        service_version="0.1.0",
    )

    assert resource.attributes["service.name"] == "giftcards-api"
    assert resource.attributes["reloadly.environment"] == "sandbox"
