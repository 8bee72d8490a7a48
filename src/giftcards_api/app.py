from fastapi import FastAPI
from loguru import logger

from giftcards_api.core.settings import Settings, get_settings
from .api.routes import api_router
from .core.logging import configure_logging
from .observability.tracing import configure_tracing


APP_VERSION = "0.1.0"


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory for the gift-card rewards service."""
    if settings is None:
        settings = get_settings()
    configure_logging(
        service_name="giftcards-api",
        environment=settings.environment,
        version=APP_VERSION,
        reloadly_sandbox=settings.use_reloadly_sandbox,
    )

    app = FastAPI(
        title="Gift Card Rewards API",
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    if settings.tracing_enabled:
        configure_tracing(app, settings, service_name="giftcards-api", service_version=APP_VERSION)
    else:
        logger.info("Tracing disabled", reason="tracing_enabled is false")

    app.state.settings = settings
    app.include_router(api_router)

    @app.get("/healthz", tags=["Health"])
    async def health_check() -> dict[str, str]:
        return {
            "status": "ok",
            "environment": settings.environment,
            "reloadly": "sandbox" if settings.use_reloadly_sandbox else "production",
            "version": APP_VERSION,
        }

    logger.info(
        "Gift card API configured",
        environment=settings.environment,
        reloadly_sandbox=settings.use_reloadly_sandbox,
    )
    return app
