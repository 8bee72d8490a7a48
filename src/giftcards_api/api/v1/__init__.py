from fastapi import APIRouter

from .endpoints import cards, health, orders, redeem_codes

router = APIRouter()
router.include_router(health.router, tags=["Health"])
router.include_router(cards.router)
router.include_router(orders.router)
router.include_router(redeem_codes.router)

# Gift-card routes are also served unprefixed, at the paths existing clients call.
legacy_router = APIRouter()
legacy_router.include_router(cards.router, include_in_schema=False)
legacy_router.include_router(orders.router, include_in_schema=False)
legacy_router.include_router(redeem_codes.router, include_in_schema=False)
