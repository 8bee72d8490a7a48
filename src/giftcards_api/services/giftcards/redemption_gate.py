from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from eth_account import Account
from eth_account.messages import encode_defunct
from loguru import logger

from giftcards_api.core.errors import NotFound
from giftcards_api.domain.giftcards.messages import get_gift_card_order_id, get_message_to_sign
from giftcards_api.schemas.giftcards import RedeemCode
from giftcards_api.services.reloadly.base import AccessToken
from giftcards_api.services.reloadly.transactions import OrderCorrelator


class RefusalReason(str, Enum):
    SIGNATURE_MISMATCH = "signature_mismatch"
    INVALID_SIGNATURE = "invalid_signature"
    NO_CLAIM_RECORD = "no_claim_record"
    TRANSACTION_MISMATCH = "transaction_mismatch"
    NOT_SUCCESSFUL = "not_successful"


@dataclass(frozen=True, slots=True)
class RevealOutcome:
    codes: Sequence[RedeemCode] = field(default_factory=tuple)
    refusal: RefusalReason | None = None

    @property
    def verified(self) -> bool:
        return self.refusal is None

    @classmethod
    def disclosed(cls, codes: Sequence[RedeemCode]) -> "RevealOutcome":
        return cls(codes=tuple(codes))

    @classmethod
    def refused(cls, reason: RefusalReason) -> "RevealOutcome":
        return cls(refusal=reason)


def recover_signer(message: str, signed_message: str) -> str | None:
    """Return the address that produced ``signed_message`` over ``message``."""

    try:
        return Account.recover_message(encode_defunct(text=message), signature=signed_message)
    except Exception as exc:
        logger.info("redemption_gate.unrecoverable_signature", error=str(exc))
        return None


class RedemptionGate:
    """Disclose redeem codes only to the wallet that signed for the transaction.

    Verification is repeated on every request; nothing is remembered between
    calls.
    """

    def __init__(self, correlator: OrderCorrelator, *, message_origin: str) -> None:
        self._correlator = correlator
        self._message_origin = message_origin

    async def reveal_codes(
        self,
        transaction_id: int,
        wallet: str,
        signed_message: str,
        permit_signature: str,
        token: AccessToken,
    ) -> RevealOutcome:
        message = get_message_to_sign(transaction_id, origin=self._message_origin)
        signer = recover_signer(message, signed_message)
        if signer is None:
            return self._refuse(RefusalReason.INVALID_SIGNATURE, transaction_id, wallet)
        if signer.lower() != wallet.lower():
            return self._refuse(RefusalReason.SIGNATURE_MISMATCH, transaction_id, wallet)

        order_id = get_gift_card_order_id(wallet, permit_signature)
        try:
            transaction = await self._correlator.find_transaction(order_id, token)
        except NotFound:
            return self._refuse(RefusalReason.NO_CLAIM_RECORD, transaction_id, wallet)

        if transaction.transaction_id != int(transaction_id):
            return self._refuse(RefusalReason.TRANSACTION_MISMATCH, transaction_id, wallet)
        if not transaction.is_successful:
            return self._refuse(RefusalReason.NOT_SUCCESSFUL, transaction_id, wallet)

        codes = await self._correlator.get_redeem_codes(transaction.transaction_id, token)
        logger.info("redemption_gate.disclosed", transaction_id=transaction_id, wallet=wallet, count=len(codes))
        return RevealOutcome.disclosed(codes)

    @staticmethod
    def _refuse(reason: RefusalReason, transaction_id: int, wallet: str) -> RevealOutcome:
        logger.warning("redemption_gate.refused", reason=reason.value, transaction_id=transaction_id, wallet=wallet)
        return RevealOutcome.refused(reason)


__all__ = ["RefusalReason", "RedemptionGate", "RevealOutcome", "recover_signer"]
