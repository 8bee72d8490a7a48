"""Static SKU tables that steer the card cascade.

The tables are grouped into an immutable :class:`CardCatalog` that is handed
to the resolver, so tests can substitute their own SKUs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from giftcards_api.domain.giftcards.countries import ALLOWED_COUNTRIES


@dataclass(frozen=True, slots=True)
class CountrySkuMapping:
    country_code: str
    sku: int


@dataclass(frozen=True, slots=True)
class FallbackProduct:
    country_code: str
    sku: int


def _index(mappings: Iterable[CountrySkuMapping]) -> Mapping[str, int]:
    return MappingProxyType({mapping.country_code.upper(): mapping.sku for mapping in mappings})


@dataclass(frozen=True)
class CardCatalog:
    """Immutable configuration consumed by the card resolver."""

    mastercard_intl_skus: Mapping[str, int]
    visa_intl_skus: Mapping[str, int]
    fallback_mastercard: FallbackProduct
    fallback_visa: FallbackProduct
    allowed_countries: frozenset[str] = field(default=ALLOWED_COUNTRIES)

    @classmethod
    def build(
        cls,
        *,
        mastercard_intl: Iterable[CountrySkuMapping],
        visa_intl: Iterable[CountrySkuMapping],
        fallback_mastercard: FallbackProduct,
        fallback_visa: FallbackProduct,
        allowed_countries: Iterable[str] | None = None,
    ) -> "CardCatalog":
        return cls(
            mastercard_intl_skus=_index(mastercard_intl),
            visa_intl_skus=_index(visa_intl),
            fallback_mastercard=fallback_mastercard,
            fallback_visa=fallback_visa,
            allowed_countries=(
                frozenset(code.upper() for code in allowed_countries)
                if allowed_countries is not None
                else ALLOWED_COUNTRIES
            ),
        )

    def mastercard_intl_sku(self, country_code: str) -> int | None:
        return self.mastercard_intl_skus.get(country_code.upper())

    def visa_intl_sku(self, country_code: str) -> int | None:
        return self.visa_intl_skus.get(country_code.upper())

    def is_allowed(self, country_code: str) -> bool:
        return country_code.upper() in self.allowed_countries


# SKU numbers are deployment data; keep them in step with the marketplace catalog.

# Tokenized "international" Mastercard products, one per issuing country.
MASTERCARD_INTL_SKUS: tuple[CountrySkuMapping, ...] = (
    CountrySkuMapping("AE", 18732),
    CountrySkuMapping("AU", 18698),
    CountrySkuMapping("BR", 18711),
    CountrySkuMapping("CA", 18706),
    CountrySkuMapping("DE", 18713),
    CountrySkuMapping("ES", 18715),
    CountrySkuMapping("FR", 18714),
    CountrySkuMapping("GB", 18700),
    CountrySkuMapping("HK", 18727),
    CountrySkuMapping("ID", 18724),
    CountrySkuMapping("IN", 18722),
    CountrySkuMapping("IT", 18716),
    CountrySkuMapping("JP", 18726),
    CountrySkuMapping("KR", 18725),
    CountrySkuMapping("MX", 18710),
    CountrySkuMapping("MY", 18723),
    CountrySkuMapping("NG", 18730),
    CountrySkuMapping("NL", 18717),
    CountrySkuMapping("PH", 18721),
    CountrySkuMapping("PL", 18718),
    CountrySkuMapping("SG", 18720),
    CountrySkuMapping("TH", 18728),
    CountrySkuMapping("TR", 18719),
    CountrySkuMapping("VN", 18729),
    CountrySkuMapping("ZA", 18731),
)

# International Visa products, one per issuing country.
VISA_INTL_SKUS: tuple[CountrySkuMapping, ...] = (
    CountrySkuMapping("AE", 18652),
    CountrySkuMapping("AU", 18640),
    CountrySkuMapping("CA", 18641),
    CountrySkuMapping("DE", 18644),
    CountrySkuMapping("ES", 18646),
    CountrySkuMapping("FR", 18645),
    CountrySkuMapping("GB", 18642),
    CountrySkuMapping("IN", 18649),
    CountrySkuMapping("IT", 18647),
    CountrySkuMapping("MX", 18643),
    CountrySkuMapping("NL", 18648),
    CountrySkuMapping("SG", 18650),
    CountrySkuMapping("ZA", 18651),
)

FALLBACK_INTL_MASTERCARD = FallbackProduct(country_code="US", sku=18597)
FALLBACK_INTL_VISA = FallbackProduct(country_code="US", sku=18598)


def default_card_catalog() -> CardCatalog:
    return CardCatalog.build(
        mastercard_intl=MASTERCARD_INTL_SKUS,
        visa_intl=VISA_INTL_SKUS,
        fallback_mastercard=FALLBACK_INTL_MASTERCARD,
        fallback_visa=FALLBACK_INTL_VISA,
    )


__all__ = [
    "CardCatalog",
    "CountrySkuMapping",
    "FALLBACK_INTL_MASTERCARD",
    "FALLBACK_INTL_VISA",
    "FallbackProduct",
    "MASTERCARD_INTL_SKUS",
    "VISA_INTL_SKUS",
    "default_card_catalog",
]
