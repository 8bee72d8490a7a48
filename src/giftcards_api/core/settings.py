from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from giftcards_api.core.errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")

    environment: Literal["development", "staging", "production"] = "development"

    # Reloadly marketplace credentials
    use_reloadly_sandbox: bool = True
    reloadly_api_client_id: str = ""
    reloadly_api_client_secret: str = ""

    # Reloadly endpoints
    reloadly_auth_url: str = "https://auth.reloadly.com/oauth/token"
    reloadly_production_url: str = "https://giftcards.reloadly.com"
    reloadly_sandbox_url: str = "https://giftcards-sandbox.reloadly.com"
    reloadly_timeout_seconds: float = 15.0

    # Reveal flow
    redeem_message_origin: str = "pay.ubq.fi"

    # Observability
    tracing_enabled: bool = True
    otel_exporter_otlp_endpoint: str | None = None
    otel_exporter_otlp_headers: str | None = None

    @field_validator("use_reloadly_sandbox", mode="before")
    @classmethod
    def _parse_sandbox_flag(cls, value: object) -> bool:
        # Only an explicit "false" switches to production.
        if isinstance(value, str):
            return value.strip().lower() != "false"
        if value is None:
            return True
        return bool(value)

    @property
    def reloadly_audience(self) -> str:
        return self.reloadly_sandbox_url if self.use_reloadly_sandbox else self.reloadly_production_url

    def require_reloadly_credentials(self) -> None:
        """Raise ``ConfigurationError`` unless marketplace credentials are present."""

        missing = [
            name
            for name, value in (
                ("RELOADLY_API_CLIENT_ID", self.reloadly_api_client_id),
                ("RELOADLY_API_CLIENT_SECRET", self.reloadly_api_client_secret),
            )
            if not value.strip()
        ]
        if missing:
            raise ConfigurationError(f"Missing required settings: {', '.join(missing)}")


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
