from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from giftcards_api.api.dependencies.reloadly import get_app_settings, get_card_catalog, get_http_client
from giftcards_api.api.responses import invalid_parameters, message_response, server_error
from giftcards_api.core.errors import CountryNotAllowed, NoCardAvailable
from giftcards_api.core.settings import Settings
from giftcards_api.domain.giftcards.catalog import CardCatalog
from giftcards_api.schemas.requests import GetBestCardParams
from giftcards_api.services.giftcards.card_resolver import CardResolver
from giftcards_api.services.reloadly import ProductCatalogClient, TokenProvider

router = APIRouter(tags=["Gift cards"])


@router.get("/get-best-card", summary="Resolve the gift card to purchase for a country and amount")
async def get_best_card(
    country: str | None = Query(default=None),
    amount: str | None = Query(default=None),
    settings: Settings = Depends(get_app_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
    catalog: CardCatalog = Depends(get_card_catalog),
) -> JSONResponse:
    try:
        params = GetBestCardParams.model_validate({"country": country, "amount": amount})
    except ValidationError as exc:
        logger.info("get_best_card.invalid_parameters", country=country, amount=amount)
        return invalid_parameters(exc)

    try:
        settings.require_reloadly_credentials()
        if not catalog.is_allowed(params.country):
            raise CountryNotAllowed(params.country)

        token = await TokenProvider(http_client, settings).acquire_token()
        resolver = CardResolver(ProductCatalogClient(http_client, settings), catalog)
        card = await resolver.resolve(params.country, params.amount_value, token)
        return JSONResponse(card.to_payload(), status_code=status.HTTP_200_OK)
    except CountryNotAllowed as exc:
        logger.info("get_best_card.country_not_allowed", country=exc.country_code)
        return message_response(status.HTTP_400_BAD_REQUEST, str(exc))
    except NoCardAvailable:
        return message_response(status.HTTP_404_NOT_FOUND, "There are no gift cards available.")
    except Exception:
        logger.exception("There was an error while processing your request.", endpoint="get-best-card", country=country, amount=amount)
        return server_error()
