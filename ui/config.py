"""UI Configuration."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class UISettings(BaseSettings):
    """UI settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="UI_",
        extra="ignore",
    )

    # API connection
    api_base_url: str = "http://localhost:8000"
    api_key: str = ""

    # UI settings
    page_title: str = "ScentValue"
    page_icon: str = ""
    debug: bool = False

    # Timeouts (seconds)
    request_timeout: int = 30
    scan_timeout: int = 120


@lru_cache()
def get_settings() -> UISettings:
    """Get cached settings instance."""
    return UISettings()
