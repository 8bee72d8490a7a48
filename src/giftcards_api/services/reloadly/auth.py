"""OAuth client-credentials exchange against the marketplace."""

from __future__ import annotations

import httpx
from loguru import logger

from giftcards_api.core.errors import AuthError
from giftcards_api.core.settings import Settings
from giftcards_api.services.reloadly.base import AccessToken, failure_message, parse_body


class TokenProvider:
    """Acquire a fresh access token for each logical flow; nothing is cached."""

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings) -> None:
        self._http = http_client
        self._settings = settings

    async def acquire_token(self) -> AccessToken:
        is_sandbox = self._settings.use_reloadly_sandbox
        logger.info("reloadly.auth.start", sandbox=is_sandbox)

        response = await self._http.post(
            self._settings.reloadly_auth_url,
            json={
                "client_id": self._settings.reloadly_api_client_id,
                "client_secret": self._settings.reloadly_api_client_secret,
                "grant_type": "client_credentials",
                "audience": self._settings.reloadly_audience,
            },
            headers={"Content-Type": "application/json", "Accept": "application/json"},
            timeout=self._settings.reloadly_timeout_seconds,
        )

        body = parse_body(response)
        if response.status_code != 200:
            logger.error("reloadly.auth.failed", status=response.status_code, message=failure_message(body))
            raise AuthError(
                f"Getting access token failed: {failure_message(body) or response.status_code}",
                status_code=response.status_code,
            )

        access_token = body.get("access_token") if isinstance(body, dict) else None
        if not access_token:
            raise AuthError("Getting access token failed: response carried no access_token", status_code=200)
        return AccessToken(token=str(access_token), is_sandbox=is_sandbox)


__all__ = ["TokenProvider"]
