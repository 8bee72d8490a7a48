"""Error taxonomy shared by the marketplace clients and the HTTP boundary."""

from __future__ import annotations


class GiftCardsError(RuntimeError):
    """Base class for gift-card service failures."""


class ConfigurationError(GiftCardsError):
    """Raised when required settings are missing."""


class AuthError(GiftCardsError):
    """Raised when the marketplace rejects the credential exchange."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(GiftCardsError):
    """Raised when the marketplace answers with an unexpected status."""

    def __init__(self, status_code: int, message: str | None, *, url: str | None = None) -> None:
        super().__init__(f"Error from Reloadly API: status={status_code} message={message!r}")
        self.status_code = status_code
        self.message = message
        self.url = url


class NotFound(GiftCardsError):
    """Raised when a lookup legitimately yields nothing."""


class CountryNotAllowed(NotFound):
    """Raised when the requested country is outside the allow-list."""

    def __init__(self, country_code: str) -> None:
        super().__init__(f"Country {country_code} is not in the allowed country list.")
        self.country_code = country_code


class NoCardAvailable(NotFound):
    """Raised when no tier of the card cascade yields an available card."""

    def __init__(self, country_code: str, amount: object) -> None:
        super().__init__(f"No suitable card found for country code {country_code} and amount {amount}.")
        self.country_code = country_code
        self.amount = amount


__all__ = [
    "AuthError",
    "ConfigurationError",
    "CountryNotAllowed",
    "GiftCardsError",
    "NoCardAvailable",
    "NotFound",
    "UpstreamError",
]
