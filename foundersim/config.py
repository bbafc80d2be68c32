"""
Configuration management for the Founder Simulator core.

Uses pydantic-settings for type-safe configuration with environment variable support.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BalanceSettings(BaseSettings):
    """
    Game balance constants used by the simulation and advisory engines.

    Frozen so a single instance can be shared between callers and passed
    around as the engine's explicit constants structure.
    """

    model_config = SettingsConfigDict(env_prefix="BALANCE_", frozen=True)

    hiring_cost_per_person: float = Field(default=5000.0, ge=0.0)
    quality_gain_per_engineer: float = Field(default=0.5, ge=0.0)
    max_quality: float = Field(default=100.0, gt=0.0, le=100.0)
    quality_demand_weight: float = Field(default=10.0, ge=0.0)
    price_demand_weight: float = Field(default=0.0001, ge=0.0)
    sales_conversion: float = Field(default=0.5, ge=0.0)
    # Full quarter's fully-loaded cost per person at 100% salary
    industry_base_salary: float = Field(default=30000.0, ge=0.0)
    max_year: int = Field(default=10, ge=1, le=100)


class StartingSettings(BaseSettings):
    """Initial company values for a new game."""

    model_config = SettingsConfigDict(env_prefix="START_", frozen=True)

    cash: float = Field(default=1_000_000.0, gt=0.0)
    quality: float = Field(default=50.0, ge=0.0, le=100.0)
    engineers: int = Field(default=4, ge=0)
    sales: int = Field(default=2, ge=0)


class DecisionLimitSettings(BaseSettings):
    """Bounds enforced on player decisions at the application boundary."""

    model_config = SettingsConfigDict(env_prefix="DECISION_", frozen=True)

    min_price: float = Field(default=1.0, gt=0.0)
    max_price: float = Field(default=1000.0, gt=0.0)
    max_hires: int = Field(default=20, ge=0)
    min_salary_pct: float = Field(default=50.0, gt=0.0)
    max_salary_pct: float = Field(default=200.0, gt=0.0)


class MarketSettings(BaseSettings):
    """Market factor source configuration."""

    model_config = SettingsConfigDict(env_prefix="MARKET_", frozen=True)

    default_factor: float = Field(default=1.0, ge=0.0)
    amplitude: float = Field(default=0.2, ge=0.0, le=1.0)
    cache_ttl_hours: int = Field(default=24, ge=1, le=24 * 30)


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="")

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    # Unset means JSON in production and console output elsewhere
    json_format: Optional[bool] = Field(default=None, alias="JSON_LOGS")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return upper_v


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    environment: str = Field(default="development", alias="ENVIRONMENT")

    # Sub-configurations (loaded separately for better organization)
    @property
    def balance(self) -> BalanceSettings:
        return BalanceSettings()

    @property
    def starting(self) -> StartingSettings:
        return StartingSettings()

    @property
    def decision_limits(self) -> DecisionLimitSettings:
        return DecisionLimitSettings()

    @property
    def market(self) -> MarketSettings:
        return MarketSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache()
def get_balance() -> BalanceSettings:
    """Get the cached default balance constants."""
    return get_settings().balance
