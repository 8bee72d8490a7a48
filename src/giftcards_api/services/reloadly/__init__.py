"""Reloadly gift-card marketplace clients."""

from .auth import TokenProvider
from .base import AccessToken, get_base_url
from .catalog import ProductCatalogClient
from .transactions import OrderCorrelator, OrderLookup

__all__ = [
    "AccessToken",
    "OrderCorrelator",
    "OrderLookup",
    "ProductCatalogClient",
    "TokenProvider",
    "get_base_url",
]
