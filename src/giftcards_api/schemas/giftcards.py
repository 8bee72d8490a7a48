from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

DenominationType = Literal["FIXED", "RANGE"]

SUCCESSFUL_STATUS = "SUCCESSFUL"


def _to_camel(value: str) -> str:
    parts = value.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class _CamelModel(BaseModel):
    """Marketplace payloads are camelCase; unknown fields are kept and forwarded."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=_to_camel, extra="allow", frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class ProductBrand(_CamelModel):
    brand_id: int | None = None
    brand_name: str | None = None


class ProductCountry(_CamelModel):
    iso_name: str | None = None
    name: str | None = None
    flag_url: str | None = None


class GiftCardProduct(_CamelModel):
    """Snapshot of a marketplace gift-card product."""

    product_id: int
    product_name: str | None = None
    global_: bool | None = Field(default=None, alias="global")
    denomination_type: DenominationType | None = None
    recipient_currency_code: str | None = None
    min_recipient_denomination: float | None = None
    max_recipient_denomination: float | None = None
    fixed_recipient_denominations: list[float] = Field(default_factory=list)
    sender_currency_code: str | None = None
    sender_fee: float | None = None
    discount_percentage: float | None = None
    logo_urls: list[str] = Field(default_factory=list)
    brand: ProductBrand | None = None
    country: ProductCountry | None = None

    @field_validator("fixed_recipient_denominations", "logo_urls", mode="before")
    @classmethod
    def _none_as_empty(cls, value: object) -> object:
        return [] if value is None else value

    @property
    def country_code(self) -> str | None:
        return self.country.iso_name if self.country else None


class TransactionProduct(_CamelModel):
    product_id: int
    product_name: str | None = None
    country_code: str | None = None
    quantity: int | None = None
    unit_price: float | None = None
    total_price: float | None = None
    currency_code: str | None = None
    brand: ProductBrand | None = None


class OrderTransaction(_CamelModel):
    """Upstream transaction created when the gift card was purchased."""

    transaction_id: int
    status: str | None = None
    custom_identifier: str | None = None
    amount: float | None = None
    discount: float | None = None
    currency_code: str | None = None
    fee: float | None = None
    recipient_email: str | None = None
    transaction_created_time: str | None = None
    product: TransactionProduct | None = None

    @property
    def is_successful(self) -> bool:
        return self.status == SUCCESSFUL_STATUS


class RedeemCode(_CamelModel):
    """Secret redemption fields; never stored, only forwarded."""

    card_number: str | None = None
    pin_code: str | None = None


class OrderResponse(BaseModel):
    transaction: dict[str, Any]
    product: dict[str, Any] | None


__all__ = [
    "DenominationType",
    "GiftCardProduct",
    "OrderResponse",
    "OrderTransaction",
    "ProductBrand",
    "ProductCountry",
    "RedeemCode",
    "SUCCESSFUL_STATUS",
    "TransactionProduct",
]
