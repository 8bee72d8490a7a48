from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import httpx
from loguru import logger

from giftcards_api.core.errors import UpstreamError
from giftcards_api.core.settings import Settings

COMMON_HEADERS: Mapping[str, str] = {
    "Content-Type": "application/json",
    "Accept": "application/com.reloadly.giftcards-v1+json",
}


@dataclass(frozen=True, slots=True)
class AccessToken:
    """Short-lived marketplace credential; re-acquired for every logical flow."""

    token: str
    is_sandbox: bool

    def __repr__(self) -> str:
        return f"AccessToken(token='***', is_sandbox={self.is_sandbox})"


def get_base_url(is_sandbox: bool, settings: Settings) -> str:
    if is_sandbox is False:
        return settings.reloadly_production_url.rstrip("/")
    return settings.reloadly_sandbox_url.rstrip("/")


def auth_headers(token: AccessToken) -> dict[str, str]:
    return {**COMMON_HEADERS, "Authorization": f"Bearer {token.token}"}


def parse_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return {"message": response.text or None}


def failure_message(body: Any) -> str | None:
    if isinstance(body, Mapping):
        message = body.get("message") or body.get("errorCode")
        return str(message) if message is not None else None
    return None


class ReloadlyResource:
    """Shared plumbing for authenticated marketplace calls."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._settings = settings

    def _url(self, token: AccessToken, path: str) -> str:
        return f"{get_base_url(token.is_sandbox, self._settings)}/{path.lstrip('/')}"

    async def _get(
        self,
        token: AccessToken,
        path: str,
        *,
        params: Mapping[str, Any] | None = None,
        log_body: bool = True,
    ) -> tuple[httpx.Response, Any]:
        url = self._url(token, path)
        logger.info("reloadly.request", method="GET", url=url, params=dict(params or {}))
        response = await self._http.get(
            url,
            params=params,
            headers=auth_headers(token),
            timeout=self._settings.reloadly_timeout_seconds,
        )
        body = parse_body(response)
        if log_body:
            logger.info("reloadly.response", url=url, status=response.status_code, body=body)
        else:
            logger.info("reloadly.response", url=url, status=response.status_code)
        return response, body

    @staticmethod
    def _raise_for_status(response: httpx.Response, body: Any) -> None:
        if response.status_code != 200:
            raise UpstreamError(response.status_code, failure_message(body), url=str(response.request.url))


__all__ = [
    "AccessToken",
    "COMMON_HEADERS",
    "ReloadlyResource",
    "auth_headers",
    "failure_message",
    "get_base_url",
    "parse_body",
]
