"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis Configuration
    redis_url: str = Field(default="redis://localhost:6379/0")
    redis_password: SecretStr | None = Field(default=None)

    # Database Configuration
    database_url: str = Field(
        default="sqlite:///./data/marketplace.db",
        description="Marketplace database URL (read-only access is sufficient)",
    )
    create_schema: bool = Field(
        default=False, description="Create missing marketplace tables on startup (development only)"
    )
    seed_demo_data: bool = Field(
        default=False, description="Seed demo creators on startup; implies create_schema"
    )

    # Cache Settings
    cache_enabled: bool = Field(default=True)
    feed_cache_ttl_seconds: int = Field(default=300, ge=1, le=3600)

    # API Settings
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)
    debug: bool = Field(default=False)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO")
    log_format: Literal["json", "pretty", "console"] = Field(default="json")

    # Feed Candidate Selection
    feed_max_candidates: int = Field(default=500, ge=1, le=5000)
    feed_half_life_hours: int = Field(default=48, ge=1)

    # Ranking Weights
    weight_recency: float = Field(default=0.45, ge=0.0, le=1.0)
    weight_rating: float = Field(default=0.30, ge=0.0, le=1.0)
    media_bonus: float = Field(default=0.15, ge=0.0, le=1.0)
    loyalty_boost: float = Field(default=0.10, ge=0.0, le=1.0)
    interest_boost_cap: float = Field(default=0.10, ge=0.0, le=1.0)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
