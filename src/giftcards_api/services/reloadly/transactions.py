"""Correlate local order ids with marketplace transactions."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Sequence

from loguru import logger

from giftcards_api.core.errors import NotFound, UpstreamError
from giftcards_api.schemas.giftcards import GiftCardProduct, OrderTransaction, RedeemCode
from giftcards_api.services.reloadly.base import AccessToken, ReloadlyResource
from giftcards_api.services.reloadly.catalog import ProductCatalogClient

REPORT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def one_year_before(moment: datetime) -> datetime:
    try:
        return moment.replace(year=moment.year - 1)
    except ValueError:
        # 29 February has no counterpart in the previous year.
        return moment.replace(year=moment.year - 1, day=28)


def lookback_window(now: datetime | None = None) -> tuple[str, str]:
    """Return the ``(startDate, endDate)`` pair for the trailing twelve months."""

    end = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    start = one_year_before(end)
    return start.strftime(REPORT_DATE_FORMAT), end.strftime(REPORT_DATE_FORMAT)


@dataclass(frozen=True, slots=True)
class OrderLookup:
    transaction: OrderTransaction
    product: GiftCardProduct | None

    @property
    def is_successful(self) -> bool:
        return self.transaction.is_successful


class OrderCorrelator(ReloadlyResource):
    """Find and enrich the marketplace transaction behind an order id."""

    def __init__(self, http_client, settings, *, catalog: ProductCatalogClient | None = None) -> None:
        super().__init__(http_client, settings)
        self._catalog = catalog or ProductCatalogClient(http_client, settings)

    async def find_transaction(
        self,
        order_id: str,
        token: AccessToken,
        *,
        now: datetime | None = None,
    ) -> OrderTransaction:
        start_date, end_date = lookback_window(now)
        # The custom identifier is unique per order, so one record is enough.
        params = {
            "size": 1,
            "page": 1,
            "customIdentifier": order_id,
            "startDate": start_date,
            "endDate": end_date,
        }
        response, body = await self._get(token, "reports/transactions", params=params)
        self._raise_for_status(response, body)

        content = body.get("content") if isinstance(body, dict) else None
        if not content:
            logger.info("reloadly.transactions.not_found", order_id=order_id, start_date=start_date)
            raise NotFound(f"No transaction found for order {order_id}.")
        return OrderTransaction.model_validate(content[0])

    async def get_order(self, order_id: str, token: AccessToken, *, now: datetime | None = None) -> OrderLookup:
        """Resolve ``order_id``; product enrichment is best effort for successful orders."""

        transaction = await self.find_transaction(order_id, token, now=now)
        if not transaction.is_successful or transaction.product is None:
            return OrderLookup(transaction=transaction, product=None)

        try:
            product = await self._catalog.get_product_by_id(transaction.product.product_id, token)
        except Exception as exc:
            logger.warning(
                "reloadly.transactions.enrichment_failed",
                order_id=order_id,
                product_id=transaction.product.product_id,
                error=str(exc),
            )
            product = None
        return OrderLookup(transaction=transaction, product=product)

    async def get_redeem_codes(self, transaction_id: int, token: AccessToken) -> Sequence[RedeemCode]:
        response, body = await self._get(
            token,
            f"orders/transactions/{int(transaction_id)}/cards",
            log_body=False,
        )
        self._raise_for_status(response, body)
        if not isinstance(body, list):
            raise UpstreamError(response.status_code, "Unexpected redeem code payload", url=str(response.request.url))
        return [RedeemCode.model_validate(item) for item in body]


__all__ = [
    "OrderCorrelator",
    "OrderLookup",
    "REPORT_DATE_FORMAT",
    "lookback_window",
    "one_year_before",
]
