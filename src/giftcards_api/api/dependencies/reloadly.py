from __future__ import annotations

from functools import lru_cache
from typing import AsyncIterator

import httpx
from fastapi import Depends, Request

from giftcards_api.core.settings import Settings, get_settings
from giftcards_api.domain.giftcards.catalog import CardCatalog, default_card_catalog


def get_app_settings(request: Request) -> Settings:
    """Settings the running app was created with."""

    return getattr(request.app.state, "settings", None) or get_settings()


async def get_http_client(settings: Settings = Depends(get_app_settings)) -> AsyncIterator[httpx.AsyncClient]:
    """One client per request; closed once the response is sent."""

    async with httpx.AsyncClient(timeout=settings.reloadly_timeout_seconds) as client:
        yield client


@lru_cache(maxsize=1)
def get_card_catalog() -> CardCatalog:
    return default_card_catalog()
