"""Client side of the redeem-code reveal.

The wallet signs the transaction's reveal message, the signature is sent to
``/get-redeem-code`` and the returned codes are handed to a renderer. The
loading indicator is held for the whole round trip and released on every
outcome, including a user cancelling the signature prompt.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, AsyncIterator, Mapping, Protocol, Sequence

import httpx
from loguru import logger

from giftcards_api.domain.giftcards.messages import get_message_to_sign

NOT_SIGNED_MESSAGE = "User did not sign the message to reveal redeem code."
NOT_CONNECTED_MESSAGE = "Connect your wallet to reveal the redeem code."
REFUSED_MESSAGE = "Redeem code can't be revealed to the connected wallet."


class WalletSigner(Protocol):
    async def sign_message(self, message: str) -> str:
        ...

    async def get_address(self) -> str:
        ...


class LoadingIndicator(Protocol):
    def set_loading(self, loading: bool) -> None:
        ...


class Toaster(Protocol):
    def create(self, kind: str, message: str) -> None:
        ...


@asynccontextmanager
async def hold_loading(indicator: LoadingIndicator) -> AsyncIterator[None]:
    indicator.set_loading(True)
    try:
        yield
    finally:
        indicator.set_loading(False)


@dataclass(frozen=True, slots=True)
class SigningResult:
    signature: str | None = None
    error: str | None = None

    @property
    def signed(self) -> bool:
        return self.signature is not None


async def request_signature(signer: WalletSigner, message: str) -> SigningResult:
    """Ask the wallet to sign; a rejection or cancellation becomes a failed result."""

    try:
        signature = await signer.sign_message(message)
    except Exception as exc:
        logger.info("reveal.signature_rejected", error=str(exc))
        return SigningResult(error=str(exc) or exc.__class__.__name__)
    if not signature:
        return SigningResult(error="empty signature")
    return SigningResult(signature=signature)


class RevealStatus(str, Enum):
    REVEALED = "revealed"
    NOT_CONNECTED = "not_connected"
    NOT_SIGNED = "not_signed"
    REFUSED = "refused"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True, slots=True)
class RevealResult:
    status: RevealStatus
    codes: Sequence[Mapping[str, Any]] = field(default_factory=tuple)

    @property
    def revealed(self) -> bool:
        return self.status is RevealStatus.REVEALED


def render_codes(codes: Sequence[Mapping[str, Any]]) -> str:
    """Render codes the way the reveal panel shows them."""

    html = "<h3>Redeem code</h3>"
    for code in codes:
        for key, value in code.items():
            html += f"<p>{key}: {value}</p>"
    return html


class RevealAction:
    def __init__(
        self,
        *,
        api_base_url: str,
        permit_signature: str,
        indicator: LoadingIndicator,
        toaster: Toaster,
        http_client: httpx.AsyncClient,
        signer: WalletSigner | None = None,
        message_origin: str = "pay.ubq.fi",
    ) -> None:
        self._api_base_url = api_base_url.rstrip("/")
        self._permit_signature = permit_signature
        self._indicator = indicator
        self._toaster = toaster
        self._http = http_client
        self._signer = signer
        self._message_origin = message_origin

    async def reveal(self, transaction_id: int | None) -> RevealResult:
        async with hold_loading(self._indicator):
            if self._signer is None or not transaction_id:
                self._toaster.create("error", NOT_CONNECTED_MESSAGE)
                return RevealResult(RevealStatus.NOT_CONNECTED)

            signing = await request_signature(
                self._signer,
                get_message_to_sign(transaction_id, origin=self._message_origin),
            )
            if not signing.signed:
                self._toaster.create("error", NOT_SIGNED_MESSAGE)
                return RevealResult(RevealStatus.NOT_SIGNED)

            return await self._fetch_codes(transaction_id, signing.signature)

    async def _fetch_codes(self, transaction_id: int, signed_message: str) -> RevealResult:
        try:
            wallet = await self._signer.get_address()
        except Exception as exc:
            logger.info("reveal.wallet_unavailable", error=str(exc))
            self._toaster.create("error", NOT_CONNECTED_MESSAGE)
            return RevealResult(RevealStatus.NOT_CONNECTED)

        try:
            response = await self._http.get(
                f"{self._api_base_url}/get-redeem-code",
                params={
                    "transactionId": transaction_id,
                    "signedMessage": signed_message,
                    "wallet": wallet,
                    "permitSig": self._permit_signature,
                },
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            logger.warning("reveal.transport_error", transaction_id=transaction_id, error=str(exc))
            self._toaster.create("error", REFUSED_MESSAGE)
            return RevealResult(RevealStatus.TRANSPORT_ERROR)

        if response.status_code != 200:
            self._toaster.create("error", REFUSED_MESSAGE)
            return RevealResult(RevealStatus.REFUSED)

        try:
            codes = response.json()
        except ValueError:
            codes = None
        if not isinstance(codes, list):
            self._toaster.create("error", REFUSED_MESSAGE)
            return RevealResult(RevealStatus.REFUSED)
        return RevealResult(RevealStatus.REVEALED, codes=tuple(codes))


__all__ = [
    "NOT_CONNECTED_MESSAGE",
    "NOT_SIGNED_MESSAGE",
    "REFUSED_MESSAGE",
    "LoadingIndicator",
    "RevealAction",
    "RevealResult",
    "RevealStatus",
    "SigningResult",
    "Toaster",
    "WalletSigner",
    "hold_loading",
    "render_codes",
    "request_signature",
]
