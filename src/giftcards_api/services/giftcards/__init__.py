"""Card selection and redemption services."""

from .card_resolver import CardResolver, CardSelection, CardTier, FallbackLookup, FallbackStatus
from .redemption_gate import RedemptionGate, RefusalReason, RevealOutcome

__all__ = [
    "CardResolver",
    "CardSelection",
    "CardTier",
    "FallbackLookup",
    "FallbackStatus",
    "RedemptionGate",
    "RefusalReason",
    "RevealOutcome",
]
