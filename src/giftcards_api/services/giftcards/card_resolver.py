"""Pick the gift card to purchase for a country and amount.

Resolution walks a fixed cascade and returns the first available candidate:

1. the country's tokenized international Mastercard,
2. the global Mastercard fallback,
3. the country's international Visa,
4. the global Visa fallback,
5. any available Mastercard listed for the country,
6. any available Visa listed for the country.

Each brand listing is fetched once and reused by the later "any available"
tiers. Fallback lookups never abort the cascade: a SKU the marketplace
reports as missing is unavailable, any other failure is logged as an error,
and both let the cascade move on.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Protocol, Sequence

from loguru import logger

from giftcards_api.core.errors import CountryNotAllowed, NoCardAvailable, UpstreamError
from giftcards_api.domain.giftcards.availability import Amount, is_gift_card_available
from giftcards_api.domain.giftcards.catalog import CardCatalog, FallbackProduct
from giftcards_api.observability.tracing import get_tracer
from giftcards_api.schemas.giftcards import GiftCardProduct
from giftcards_api.services.reloadly.base import AccessToken

MASTERCARD = "mastercard"
VISA = "visa"

AvailabilityPredicate = Callable[[GiftCardProduct, Amount], bool]


class ProductSource(Protocol):
    """Subset of the catalog client the resolver depends on."""

    async def list_products(
        self, brand_keyword: str, country_code: str, token: AccessToken
    ) -> Sequence[GiftCardProduct]:
        ...

    async def get_product_by_id(self, product_id: int, token: AccessToken) -> GiftCardProduct:
        ...


class CardTier(str, Enum):
    MASTERCARD_INTL = "mastercard_intl"
    MASTERCARD_FALLBACK = "mastercard_fallback"
    VISA_INTL = "visa_intl"
    VISA_FALLBACK = "visa_fallback"
    ANY_MASTERCARD = "any_mastercard"
    ANY_VISA = "any_visa"


class FallbackStatus(str, Enum):
    FOUND = "found"
    UNAVAILABLE = "unavailable"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class FallbackLookup:
    """Outcome of fetching a brand-wide fallback product."""

    status: FallbackStatus
    product: GiftCardProduct | None = None
    error: Exception | None = None

    @classmethod
    def found(cls, product: GiftCardProduct) -> "FallbackLookup":
        return cls(status=FallbackStatus.FOUND, product=product)

    @classmethod
    def unavailable(cls) -> "FallbackLookup":
        return cls(status=FallbackStatus.UNAVAILABLE)

    @classmethod
    def failed(cls, error: Exception) -> "FallbackLookup":
        return cls(status=FallbackStatus.ERROR, error=error)


@dataclass(frozen=True, slots=True)
class CardSelection:
    product: GiftCardProduct
    tier: CardTier


class CardResolver:
    def __init__(
        self,
        products: ProductSource,
        catalog: CardCatalog,
        *,
        is_available: AvailabilityPredicate = is_gift_card_available,
    ) -> None:
        self._products = products
        self._catalog = catalog
        self._is_available = is_available

    async def resolve(self, country_code: str, amount: Amount, token: AccessToken) -> GiftCardProduct:
        selection = await self.select(country_code, amount, token)
        return selection.product

    async def select(self, country_code: str, amount: Amount, token: AccessToken) -> CardSelection:
        """Run the cascade and report which tier produced the card."""

        country_code = country_code.upper()
        if not self._catalog.is_allowed(country_code):
            raise CountryNotAllowed(country_code)

        with get_tracer().start_as_current_span("card_resolver.resolve") as span:
            span.set_attribute("giftcards.country", country_code)
            span.set_attribute("giftcards.amount", str(amount))
            span.set_attribute("giftcards.sandbox", token.is_sandbox)

            selection = await self._cascade(country_code, amount, token)
            if selection is None:
                span.set_attribute("giftcards.tier", "none")
                logger.info("card_resolver.no_card", country=country_code, amount=str(amount))
                raise NoCardAvailable(country_code, amount)

            span.set_attribute("giftcards.tier", selection.tier.value)
            logger.info(
                "card_resolver.selected",
                country=country_code,
                amount=str(amount),
                tier=selection.tier.value,
                product_id=selection.product.product_id,
            )
            return selection

    async def _cascade(self, country_code: str, amount: Amount, token: AccessToken) -> CardSelection | None:
        mastercards = await self._products.list_products(MASTERCARD, country_code, token)
        intl_mastercard = self._match_sku(mastercards, self._catalog.mastercard_intl_sku(country_code), amount)
        if intl_mastercard is not None:
            return CardSelection(intl_mastercard, CardTier.MASTERCARD_INTL)

        fallback_mastercard = await self.lookup_fallback(self._catalog.fallback_mastercard, token)
        if fallback_mastercard.product is not None and self._is_available(fallback_mastercard.product, amount):
            return CardSelection(fallback_mastercard.product, CardTier.MASTERCARD_FALLBACK)

        visas = await self._products.list_products(VISA, country_code, token)
        intl_visa = self._match_sku(visas, self._catalog.visa_intl_sku(country_code), amount)
        if intl_visa is not None:
            return CardSelection(intl_visa, CardTier.VISA_INTL)

        fallback_visa = await self.lookup_fallback(self._catalog.fallback_visa, token)
        if fallback_visa.product is not None and self._is_available(fallback_visa.product, amount):
            return CardSelection(fallback_visa.product, CardTier.VISA_FALLBACK)

        any_mastercard = self._first_available(mastercards, amount)
        if any_mastercard is not None:
            return CardSelection(any_mastercard, CardTier.ANY_MASTERCARD)

        any_visa = self._first_available(visas, amount)
        if any_visa is not None:
            return CardSelection(any_visa, CardTier.ANY_VISA)

        return None

    async def lookup_fallback(self, fallback: FallbackProduct, token: AccessToken) -> FallbackLookup:
        try:
            product = await self._products.get_product_by_id(fallback.sku, token)
        except UpstreamError as exc:
            if exc.status_code != 404:
                return self._fallback_failed(fallback, exc)
            logger.info("card_resolver.fallback_unavailable", sku=fallback.sku, fallback_country=fallback.country_code)
            return FallbackLookup.unavailable()
        except Exception as exc:
            return self._fallback_failed(fallback, exc)
        if product is None:
            return FallbackLookup.unavailable()
        return FallbackLookup.found(product)

    @staticmethod
    def _fallback_failed(fallback: FallbackProduct, exc: Exception) -> FallbackLookup:
        logger.opt(exception=exc).error(
            "card_resolver.fallback_failed",
            sku=fallback.sku,
            fallback_country=fallback.country_code,
        )
        return FallbackLookup.failed(exc)

    def _match_sku(
        self,
        products: Sequence[GiftCardProduct],
        sku: int | None,
        amount: Amount,
    ) -> GiftCardProduct | None:
        if sku is None:
            return None
        for product in products:
            if product.product_id == sku:
                return product if self._is_available(product, amount) else None
        return None

    def _first_available(self, products: Sequence[GiftCardProduct], amount: Amount) -> GiftCardProduct | None:
        for product in products:
            if self._is_available(product, amount):
                return product
        return None


__all__ = [
    "CardResolver",
    "CardSelection",
    "CardTier",
    "FallbackLookup",
    "FallbackStatus",
    "ProductSource",
]
