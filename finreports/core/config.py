"""
Application configuration using pydantic-settings.

Loaded from FINREPORTS_* environment variables (or .env). Only the API edge
reads settings; the domain receives explicit per-call options.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_prefix="FINREPORTS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = Field(default="sqlite:///./data/finreports.db", description="SQLAlchemy URL")
    database_echo: bool = False

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "console"] = "console"

    # Report formatting
    precision: int = Field(default=2, ge=0, le=6, description="Decimal places for ratios/percentages")
    materiality: Decimal = Field(default=Decimal("0.01"), ge=0, description="Materiality epsilon")
    cost_estimate_ratio: Decimal = Field(
        default=Decimal("0.6"), ge=0, description="Unit cost estimate as share of unit price"
    )

    # Limits (default, maximum)
    aging_limit: int = 100
    aging_max_limit: int = 500
    profitability_limit: int = 50
    profitability_max_limit: int = 200
    variance_limit: int = 100
    variance_max_limit: int = 200
    variance_threshold: Decimal = Decimal("5")
    dimension_limit: int = 50
    dimension_max_limit: int = 100


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def clamp_limit(limit: int | None, default: int, maximum: int) -> int:
    """Out-of-range limits fall back to the default."""
    if limit is None or limit <= 0 or limit > maximum:
        return default
    return limit
