from __future__ import annotations

from typing import Dict, Literal

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from giftcards_api.api.dependencies.reloadly import get_app_settings, get_card_catalog
from giftcards_api.core.errors import ConfigurationError
from giftcards_api.core.settings import Settings
from giftcards_api.domain.giftcards.catalog import CardCatalog


router = APIRouter()


class ComponentStatus(BaseModel):
    status: Literal["ready", "disabled", "error"]
    detail: str | None = Field(default=None, description="Human readable status detail")


class ReadinessPayload(BaseModel):
    status: Literal["ready", "error"]
    components: Dict[str, ComponentStatus]


@router.get("/healthz", summary="Service health check")
async def service_health() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/readyz", summary="Service readiness", response_model=ReadinessPayload)
async def service_readiness(
    settings: Settings = Depends(get_app_settings),
    catalog: CardCatalog = Depends(get_card_catalog),
) -> ReadinessPayload:
    components: Dict[str, ComponentStatus] = {}
    status: Literal["ready", "error"] = "ready"

    try:
        settings.require_reloadly_credentials()
    except ConfigurationError as exc:
        components["reloadly_credentials"] = ComponentStatus(status="error", detail=str(exc))
        status = "error"
    else:
        components["reloadly_credentials"] = ComponentStatus(status="ready", detail="Client credentials configured")

    environment = "sandbox" if settings.use_reloadly_sandbox else "production"
    components["reloadly_environment"] = ComponentStatus(
        status="ready",
        detail=f"Targeting {environment} ({settings.reloadly_audience})",
    )

    components["card_catalog"] = ComponentStatus(
        status="ready",
        detail=(
            f"{len(catalog.mastercard_intl_skus)} Mastercard and {len(catalog.visa_intl_skus)} Visa "
            f"international SKUs, {len(catalog.allowed_countries)} allowed countries"
        ),
    )

    return ReadinessPayload(status=status, components=components)
