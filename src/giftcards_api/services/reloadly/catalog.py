from __future__ import annotations

from typing import Any, Sequence

from loguru import logger

from giftcards_api.core.errors import UpstreamError
from giftcards_api.schemas.giftcards import GiftCardProduct
from giftcards_api.services.reloadly.base import AccessToken, ReloadlyResource

# productCategoryId 1 is "Finance"; it keeps unrelated products with similar
# names (e.g. "Visa" in a game card title) out of the listing.
FINANCE_CATEGORY_ID = 1


def normalize_product_listing(body: Any) -> list[dict[str, Any]]:
    """Production returns a bare array, sandbox wraps it in ``{"content": [...]}``."""

    if isinstance(body, list):
        return body
    if isinstance(body, dict):
        content = body.get("content")
        if isinstance(content, list):
            return content
    return []


class ProductCatalogClient(ReloadlyResource):
    """Query marketplace gift-card products."""

    async def list_products(
        self,
        brand_keyword: str,
        country_code: str,
        token: AccessToken,
    ) -> Sequence[GiftCardProduct]:
        params = {"productName": brand_keyword, "productCategoryId": FINANCE_CATEGORY_ID}
        if token.is_sandbox:
            # The sandbox catalog cannot be filtered by country.
            path = "products"
        else:
            path = f"countries/{country_code.upper()}/products"

        response, body = await self._get(token, path, params=params)
        if response.status_code == 404:
            return []
        self._raise_for_status(response, body)

        products = [GiftCardProduct.model_validate(item) for item in normalize_product_listing(body)]
        logger.info(
            "reloadly.catalog.listed",
            brand=brand_keyword,
            country=country_code,
            sandbox=token.is_sandbox,
            count=len(products),
        )
        return products

    async def get_product_by_id(self, product_id: int, token: AccessToken) -> GiftCardProduct:
        response, body = await self._get(token, f"products/{int(product_id)}")
        self._raise_for_status(response, body)
        if not isinstance(body, dict):
            raise UpstreamError(response.status_code, "Unexpected product payload", url=str(response.request.url))
        return GiftCardProduct.model_validate(body)


__all__ = ["FINANCE_CATEGORY_ID", "ProductCatalogClient", "normalize_product_listing"]
