from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _QueryModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")


class GetBestCardParams(_QueryModel):
    country: str = Field(..., pattern=r"^[A-Za-z]{2}$")
    amount: str = Field(..., pattern=r"^[0-9]+$", max_length=30)

    @field_validator("country")
    @classmethod
    def _upper(cls, value: str) -> str:
        return value.upper()

    @property
    def amount_value(self) -> Decimal:
        return Decimal(self.amount)


class GetOrderParams(_QueryModel):
    order_id: str = Field(..., alias="orderId", min_length=1, max_length=256)


class GetRedeemCodeParams(_QueryModel):
    transaction_id: int = Field(..., alias="transactionId", gt=0)
    signed_message: str = Field(..., alias="signedMessage", pattern=r"^0x[0-9a-fA-F]+$")
    wallet: str = Field(..., pattern=r"^0x[0-9a-fA-F]{40}$")
    permit_sig: str = Field(..., alias="permitSig", pattern=r"^0x[0-9a-fA-F]+$")


__all__ = ["GetBestCardParams", "GetOrderParams", "GetRedeemCodeParams"]
