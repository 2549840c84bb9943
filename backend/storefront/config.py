"""Application configuration management using Pydantic Settings."""
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the directory where settings.py is located
BASE_DIR = Path(__file__).resolve().parent

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = "Sports Merchandise Storefront"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern="^(development|staging|production)$")
    app_url: str = Field(default="http://localhost:3000", description="Public storefront URL used in tracking links")

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api"
    cors_origins: list[str] = ["http://localhost:3000"]

    # MongoDB
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = "storefront"
    mongodb_orders_collection: str = "orders"
    mongodb_products_collection: str = "products"
    mongodb_cart_collection: str = "cart_items"
    mongodb_leagues_collection: str = "custom_leagues"
    mongodb_teams_collection: str = "custom_teams"
    mongodb_team_links_collection: str = "team_league_links"
    mongodb_delivery_prices_collection: str = "delivery_prices"
    mongodb_max_pool_size: int = 10
    mongodb_min_pool_size: int = 1

    # Paystack
    paystack_secret_key: str = Field(default="", description="Paystack secret key")
    paystack_base_url: str = "https://api.paystack.co"
    paystack_currency: str = "GHS"
    paystack_callback_path: str = "/checkout/callback"
    paystack_timeout: float = 10.0
    paystack_verify_timeout: float = 15.0

    # Email (SMTP)
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_username: str = Field(default="", description="SMTP username")
    smtp_password: str = Field(default="", description="SMTP password")
    smtp_from_email: str = Field(default="noreply@cediman.com")

    # SMS (Arkesel)
    arkesel_api_key: str = Field(default="", description="Arkesel API key")
    arkesel_sender_id: str = "Cediman"
    arkesel_base_url: str = "https://sms.arkesel.com/api/v2"
    arkesel_sandbox: bool = False
    sms_timeout: float = 10.0

    # Orders
    order_total_tolerance: float = Field(default=0.01, ge=0)
    customization_fee: float = 35.0
    enforce_status_transitions: bool = False
    admin_orders_limit: int = 50

    # Rate Limiting
    rate_limit_requests: int = 30
    rate_limit_period: int = 60  # seconds

    # Logging
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file= BASE_DIR.parent / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("app_url", mode="after")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Tracking and callback links are built by appending a path."""
        return v.rstrip("/")


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
