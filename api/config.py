"""
API Configuration

All secrets loaded from environment variables.
NEVER hardcode API keys, passwords, or secrets.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from scentvalue.models.common import (
    DEFAULT_CURRENCY,
    DEFAULT_RATE_PER_GRAM,
    DEFAULT_TARE_GRAMS,
    PricingConfig,
)


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App info
    app_name: str = "ScentValue API"
    app_version: str = "1.0.0"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Security - API Keys (comma-separated list)
    api_keys: str = ""  # Loaded from API_KEYS env var

    # CORS
    cors_origins: str = "http://localhost:8501,http://localhost:3000"

    # Uploads
    max_upload_size_mb: int = 15

    # Pricing (fixed for the lifetime of the process)
    tare_grams: float = DEFAULT_TARE_GRAMS
    rate_per_gram: float = DEFAULT_RATE_PER_GRAM
    currency: str = DEFAULT_CURRENCY

    # OpenAI (assistant + image reading)
    openai_api_key: Optional[str] = None  # Loaded from OPENAI_API_KEY env var
    openai_model: str = "gpt-4o-mini"

    # Logging
    log_level: str = "INFO"

    @property
    def api_key_list(self) -> List[str]:
        """Parse comma-separated API keys."""
        if not self.api_keys:
            return []
        return [k.strip() for k in self.api_keys.split(",") if k.strip()]

    @property
    def cors_origin_list(self) -> List[str]:
        """Parse comma-separated CORS origins."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def pricing(self) -> PricingConfig:
        """Tare/rate/currency as an immutable pricing config."""
        return PricingConfig(
            tare_grams=self.tare_grams,
            rate_per_gram=self.rate_per_gram,
            currency=self.currency,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
