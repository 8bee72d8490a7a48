from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from giftcards_api.api.dependencies.reloadly import get_app_settings, get_http_client
from giftcards_api.api.responses import invalid_parameters, message_response, server_error
from giftcards_api.core.errors import NotFound
from giftcards_api.core.settings import Settings
from giftcards_api.schemas.giftcards import OrderResponse
from giftcards_api.schemas.requests import GetOrderParams
from giftcards_api.services.reloadly import OrderCorrelator, TokenProvider

router = APIRouter(tags=["Orders"])

NOT_SUCCESSFUL_MESSAGE = "There is no successful transaction for given order ID."


@router.get("/get-order", summary="Look up the marketplace transaction for an order id")
async def get_order(
    order_id: str | None = Query(default=None, alias="orderId"),
    settings: Settings = Depends(get_app_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    try:
        params = GetOrderParams.model_validate({"orderId": order_id})
    except ValidationError as exc:
        return invalid_parameters(exc)

    try:
        settings.require_reloadly_credentials()
        token = await TokenProvider(http_client, settings).acquire_token()
        lookup = await OrderCorrelator(http_client, settings).get_order(params.order_id, token)
        if not lookup.is_successful:
            logger.info("get_order.not_successful", order_id=params.order_id, status=lookup.transaction.status)
            return message_response(status.HTTP_404_NOT_FOUND, NOT_SUCCESSFUL_MESSAGE)

        body = OrderResponse(
            transaction=lookup.transaction.to_payload(),
            product=lookup.product.to_payload() if lookup.product else None,
        )
        return JSONResponse(body.model_dump(), status_code=status.HTTP_200_OK)
    except NotFound:
        return JSONResponse("Order not found.", status_code=status.HTTP_404_NOT_FOUND)
    except Exception:
        logger.exception("There was an error while processing your request.", endpoint="get-order", order_id=order_id)
        return server_error()
