from __future__ import annotations

import json
import logging
from logging import LogRecord
from typing import Any, Dict, Mapping

from loguru import logger
from opentelemetry import trace


_RESERVED_LOG_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
}

# Structured extras that must never reach the log sink verbatim.
_SECRET_KEYS = {
    "access_token",
    "authorization",
    "cardnumber",
    "card_number",
    "client_secret",
    "permit_signature",
    "pincode",
    "pin_code",
    "signed_message",
    "token",
}

_MASK = "***"


def mask_secrets(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of ``values`` with secret-bearing keys masked, recursively."""

    masked: Dict[str, Any] = {}
    for key, value in values.items():
        if isinstance(key, str) and key.lower() in _SECRET_KEYS:
            masked[key] = _MASK
        elif isinstance(value, Mapping):
            masked[key] = mask_secrets(value)
        elif isinstance(value, list):
            masked[key] = [mask_secrets(item) if isinstance(item, Mapping) else item for item in value]
        else:
            masked[key] = value
    return masked


class InterceptHandler(logging.Handler):
    """Bridge standard logging records (uvicorn, httpx) into Loguru."""

    def emit(self, record: LogRecord) -> None:  # pragma: no cover - bridging glue
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        try:
            message = record.getMessage()
        except Exception:  # pragma: no cover - malformed format strings
            message = record.msg if isinstance(record.msg, str) else str(record.msg)

        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_LOG_RECORD_ATTRS
        }

        safe_message = message.replace("{", "{{").replace("}", "}}")

        bound_logger = logger.bind(**extra) if extra else logger
        bound_logger.opt(depth=6, exception=record.exc_info, record=True).log(
            level, safe_message
        )


def build_log_payload(record: Mapping[str, Any], metadata: Mapping[str, Any]) -> Dict[str, Any]:
    """Shape a Loguru record into the JSON document written to stdout."""

    span = trace.get_current_span()
    span_context = span.get_span_context() if span else None

    payload: Dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name.lower(),
        "message": record["message"],
        "logger": record["name"],
        "service": metadata.get("service_name", "unknown"),
        "environment": metadata.get("environment", "unknown"),
        "version": metadata.get("version", "unknown"),
        "reloadly_sandbox": metadata.get("reloadly_sandbox"),
    }

    if span_context and span_context.is_valid:
        payload["trace_id"] = f"{span_context.trace_id:032x}"
        payload["span_id"] = f"{span_context.span_id:016x}"

    if record["extra"]:
        payload.update(mask_secrets(record["extra"]))

    exception = record.get("exception")
    if exception is not None and exception.type is not None:
        payload["error_type"] = exception.type.__name__
        payload["error"] = str(exception.value)

    return payload


def _serialize_log(message: "logger.Message", metadata: Dict[str, Any]) -> None:
    serialized = json.dumps(build_log_payload(message.record, metadata), default=str)
    print(serialized)


def configure_logging(*, service_name: str, environment: str, version: str, reloadly_sandbox: bool) -> None:
    """Configure Loguru + stdlib logging with structured JSON output."""

    logger.remove()
    metadata = {
        "service_name": service_name,
        "environment": environment,
        "version": version,
        "reloadly_sandbox": reloadly_sandbox,
    }
    logger.add(lambda message: _serialize_log(message, metadata), backtrace=False, diagnose=False)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
