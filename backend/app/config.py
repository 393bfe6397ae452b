"""Application configuration management using Pydantic Settings."""
from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Get the directory where config.py is located
BASE_DIR = Path(__file__).resolve().parent

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application
    app_name: str = "Storefront API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", pattern="^(development|staging|production)$")

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"
    # Comma-separated in env files, so not JSON-decoded
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000", "http://localhost:5173"]

    # MongoDB
    mongodb_url: str = Field(default="mongodb://localhost:27017")
    mongodb_database: str = "storefront"
    mongodb_max_pool_size: int = 10
    mongodb_min_pool_size: int = 1

    # Pricing
    tax_rate: float = Field(default=0.08, ge=0, le=1, description="Flat sales tax rate")
    shipping_amount: float = Field(default=0.0, ge=0, description="Flat shipping charge")
    currency: str = "USD"

    # Checkout
    order_number_attempts: int = Field(default=3, ge=1)

    # Auth
    session_ttl_hours: int = 168
    password_hash_iterations: int = 260_000

    # Rate Limiting
    rate_limit_requests: int = 60
    rate_limit_period: int = 60  # seconds

    # Logging
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    log_format: str = "json"

    model_config = SettingsConfigDict(
        env_file=BASE_DIR.parent / ".env",
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


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
