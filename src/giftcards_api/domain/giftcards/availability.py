from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

from giftcards_api.schemas.giftcards import GiftCardProduct

Amount = Union[Decimal, int, float, str]


def _to_decimal(value: Amount | None) -> Decimal | None:
    if value is None:
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None


def is_range_price_available(card: GiftCardProduct, amount: Decimal) -> bool:
    minimum = _to_decimal(card.min_recipient_denomination)
    maximum = _to_decimal(card.max_recipient_denomination)
    if minimum is None or maximum is None:
        return False
    return minimum <= amount <= maximum


def is_fixed_price_available(card: GiftCardProduct, amount: Decimal) -> bool:
    return any(_to_decimal(value) == amount for value in card.fixed_recipient_denominations)


def is_gift_card_available(card: GiftCardProduct, amount: Amount) -> bool:
    """Return whether ``card`` can be purchased for exactly ``amount``."""

    requested = _to_decimal(amount)
    if requested is None or requested <= 0:
        return False
    if card.denomination_type == "RANGE":
        return is_range_price_available(card, requested)
    if card.denomination_type == "FIXED":
        return is_fixed_price_available(card, requested)
    return False


__all__ = ["Amount", "is_fixed_price_available", "is_gift_card_available", "is_range_price_available"]
