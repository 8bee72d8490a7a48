from __future__ import annotations

import httpx
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import ValidationError

from giftcards_api.api.dependencies.reloadly import get_app_settings, get_http_client
from giftcards_api.api.responses import invalid_parameters, message_response, server_error
from giftcards_api.core.settings import Settings
from giftcards_api.schemas.requests import GetRedeemCodeParams
from giftcards_api.services.giftcards.redemption_gate import RedemptionGate
from giftcards_api.services.reloadly import OrderCorrelator, TokenProvider

router = APIRouter(tags=["Redeem codes"])

REFUSED_MESSAGE = "Redeem code can't be revealed to the connected wallet."


@router.get("/get-redeem-code", summary="Reveal redeem codes to the wallet that signed for them")
async def get_redeem_code(
    transaction_id: str | None = Query(default=None, alias="transactionId"),
    signed_message: str | None = Query(default=None, alias="signedMessage"),
    wallet: str | None = Query(default=None),
    permit_sig: str | None = Query(default=None, alias="permitSig"),
    settings: Settings = Depends(get_app_settings),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> JSONResponse:
    try:
        params = GetRedeemCodeParams.model_validate(
            {
                "transactionId": transaction_id,
                "signedMessage": signed_message,
                "wallet": wallet,
                "permitSig": permit_sig,
            }
        )
    except ValidationError as exc:
        return invalid_parameters(exc)

    try:
        settings.require_reloadly_credentials()
        token = await TokenProvider(http_client, settings).acquire_token()
        gate = RedemptionGate(OrderCorrelator(http_client, settings), message_origin=settings.redeem_message_origin)
        outcome = await gate.reveal_codes(
            params.transaction_id,
            params.wallet,
            params.signed_message,
            params.permit_sig,
            token,
        )
        if not outcome.verified:
            return message_response(status.HTTP_403_FORBIDDEN, REFUSED_MESSAGE)
        return JSONResponse([code.to_payload() for code in outcome.codes], status_code=status.HTTP_200_OK)
    except Exception:
        logger.exception(
            "There was an error while processing your request.",
            endpoint="get-redeem-code",
            transaction_id=transaction_id,
            wallet=wallet,
        )
        return server_error()
