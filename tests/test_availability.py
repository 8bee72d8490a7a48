from __future__ import annotations

from decimal import Decimal

import pytest

from giftcards_api.domain.giftcards.availability import is_gift_card_available
from giftcards_api.schemas.giftcards import GiftCardProduct

from reloadly_fakes import make_product


@pytest.mark.parametrize(
    ("amount", "expected"),
    [(Decimal("5"), True), (Decimal("50"), True), (Decimal("500"), True), (Decimal("4.99"), False), (501, False)],
)
def test_range_card_bounds_are_inclusive(amount, expected) -> None:
    card = GiftCardProduct.model_validate(make_product(1, minimum=5, maximum=500))

    assert is_gift_card_available(card, amount) is expected


def test_fixed_card_requires_exact_denomination() -> None:
    card = GiftCardProduct.model_validate(make_product(2, fixed=[10, 25.5, 50]))

    assert is_gift_card_available(card, "50") is True
    assert is_gift_card_available(card, Decimal("25.50")) is True
    assert is_gift_card_available(card, 30) is False


def test_card_without_denominations_is_unavailable() -> None:
    card = GiftCardProduct.model_validate({"productId": 3, "denominationType": "RANGE"})

    assert is_gift_card_available(card, 10) is False


def test_non_positive_or_malformed_amounts_are_rejected() -> None:
    card = GiftCardProduct.model_validate(make_product(4, minimum=0, maximum=100))

    assert is_gift_card_available(card, 0) is False
    assert is_gift_card_available(card, "ten") is False
