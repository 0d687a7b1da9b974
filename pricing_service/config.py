"""
Application configuration via Pydantic Settings
"""
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Settings
    APP_NAME: str = "pricing-service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # CORS Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000,http://localhost:5173"

    # Storefront API (referral, cart and shipping endpoints)
    STOREFRONT_API_URL: str = "http://localhost:3000/api"
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # Managed backend (bundle tiers and products)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""
    BUNDLE_TIERS_TABLE: str = "digital_bundle_tiers"
    BUNDLE_PRODUCT_NAME: str = "Digital Download Bundle"
    BUNDLE_TIER_CACHE_SECONDS: int = 300

    # Checkout rules
    ADDRESS_LINE_MAX_LENGTH: int = 35
    DEFAULT_CURRENCY: str = "GBP"

    # Exchange rates
    EXCHANGE_RATE_API_URL: str = "https://api.exchangerate-api.com/v4/latest/USD"
    EXCHANGE_RATE_CACHE_SECONDS: int = 3600

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @property
    def allowed_origins_list(self) -> List[str]:
        """Split the CORS origins string into a list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    @property
    def supabase_rest_url(self) -> str:
        return f"{self.SUPABASE_URL.rstrip('/')}/rest/v1"


# Singleton instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
