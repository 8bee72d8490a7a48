"""Gift-card selection rules and reveal-flow primitives."""

from .availability import is_gift_card_available
from .catalog import CardCatalog, CountrySkuMapping, FallbackProduct, default_card_catalog
from .countries import ALLOWED_COUNTRIES
from .messages import get_gift_card_order_id, get_message_to_sign

__all__ = [
    "ALLOWED_COUNTRIES",
    "CardCatalog",
    "CountrySkuMapping",
    "FallbackProduct",
    "default_card_catalog",
    "get_gift_card_order_id",
    "get_message_to_sign",
    "is_gift_card_available",
]
