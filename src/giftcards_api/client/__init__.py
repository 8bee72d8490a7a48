"""Python client for the wallet-signed redeem-code reveal."""

from .reveal import (
    NOT_CONNECTED_MESSAGE,
    NOT_SIGNED_MESSAGE,
    REFUSED_MESSAGE,
    RevealAction,
    RevealResult,
    RevealStatus,
    render_codes,
)

__all__ = [
    "NOT_CONNECTED_MESSAGE",
    "NOT_SIGNED_MESSAGE",
    "REFUSED_MESSAGE",
    "RevealAction",
    "RevealResult",
    "RevealStatus",
    "render_codes",
]
