from __future__ import annotations

import json
from datetime import datetime, timezone
from types import SimpleNamespace

from giftcards_api.app import create_app
from giftcards_api.core.logging import build_log_payload, mask_secrets

from reloadly_fakes import build_settings


def test_mask_secrets_masks_nested_credentials() -> None:
    masked = mask_secrets(
        {
            "client_id": "abc",
            "client_secret": "s3cret",
            "body": [{"cardNumber": "4111", "pinCode": "0000", "note": "ok"}],
            "headers": {"Authorization": "Bearer t"},
        }
    )

    assert masked["client_id"] == "abc"
    assert masked["client_secret"] == "***"
    assert masked["body"] == [{"cardNumber": "***", "pinCode": "***", "note": "ok"}]
    assert masked["headers"] == {"Authorization": "***"}


def test_build_log_payload_includes_metadata_and_error() -> None:
    try:
        raise ValueError("bad amount")
    except ValueError as exc:
        error = exc

    record = {
        "time": datetime(2026, 10, 17, tzinfo=timezone.utc),
        "level": SimpleNamespace(name="ERROR"),
        "message": "There was an error while processing your request.",
        "name": "giftcards_api.api.v1.endpoints.cards",
        "extra": {"endpoint": "get-best-card", "token": "raw"},
        "exception": SimpleNamespace(type=ValueError, value=error),
    }

    payload = build_log_payload(
        record,
        {"service_name": "giftcards-api", "environment": "development", "version": "0.1.0", "reloadly_sandbox": True},
    )

    assert payload["level"] == "error"
    assert payload["service"] == "giftcards-api"
    assert payload["reloadly_sandbox"] is True
    assert payload["endpoint"] == "get-best-card"
    assert payload["token"] == "***"
    assert payload["error_type"] == "ValueError"
    assert payload["error"] == "bad amount"
    assert "trace_id" not in payload


def test_log_lines_carry_the_reloadly_environment_in_effect(capsys) -> None:
    create_app(build_settings(use_reloadly_sandbox=False))

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line.startswith("{")]

    assert lines
    assert all(line["reloadly_sandbox"] is False for line in lines)
