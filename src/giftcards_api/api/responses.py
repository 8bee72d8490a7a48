from __future__ import annotations

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

GENERIC_ERROR_MESSAGE = "There was an error while processing your request."


def message_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"message": message}, status_code=status_code)


def server_error() -> JSONResponse:
    return message_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def invalid_parameters(exc: ValidationError) -> JSONResponse:
    errors: list[dict[str, Any]] = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return JSONResponse({"message": "Invalid parameters", "errors": errors}, status_code=status.HTTP_400_BAD_REQUEST)


__all__ = ["GENERIC_ERROR_MESSAGE", "invalid_parameters", "message_response", "server_error"]
