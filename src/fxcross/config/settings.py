# src/fxcross/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Every value has a default, so the benchmark runs without any environment;
environment variables (or a local .env file) override them.

Files that USE this module:
- fxcross.app (loads settings for logging and the benchmark run)
- fxcross.application.benchmark (builds the generator and processor from settings)

Files that this module USES:
- fxcross.shared.validators (validation functions for settings)
- fxcross.application.fetch_service (generator defaults and limits)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator, model_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from fxcross.application.fetch_service import (
    DEFAULT_BASE_CURRENCY,  # Currency generated rates are quoted from
    DEFAULT_COUNT,  # Size of the canonical dataset
    DEFAULT_MAX_RATE,
    DEFAULT_MIN_RATE,
    MAX_UNIQUE_CODES,  # 26^3 distinct 3-letter codes
)
from fxcross.shared.validators import (
    validate_currency_code,  # Validate 3-character currency codes
    validate_log_level,  # Validate logging level names
)


class Settings(BaseSettings):
    """Benchmark settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Dataset ---
    currency_count: int = Field(default=DEFAULT_COUNT, alias="FXCROSS_CURRENCY_COUNT", ge=0, le=MAX_UNIQUE_CODES)
    base_currency: str = Field(default=DEFAULT_BASE_CURRENCY, alias="FXCROSS_BASE_CURRENCY")
    min_rate: float = Field(default=DEFAULT_MIN_RATE, alias="FXCROSS_MIN_RATE", gt=0.0)
    max_rate: float = Field(default=DEFAULT_MAX_RATE, alias="FXCROSS_MAX_RATE", gt=0.0)
    seed: Optional[int] = Field(default=None, alias="FXCROSS_SEED")

    # --- Pair processing ---
    max_workers: Optional[int] = Field(default=None, alias="FXCROSS_MAX_WORKERS", ge=1)
    batch_size: int = Field(default=512, alias="FXCROSS_BATCH_SIZE", ge=1)
    max_pending: Optional[int] = Field(default=None, alias="FXCROSS_MAX_PENDING", ge=1)
    deadline_seconds: Optional[float] = Field(default=None, alias="FXCROSS_DEADLINE_SECONDS", gt=0.0)

    # --- Report ---
    sample_size: int = Field(default=10, alias="FXCROSS_SAMPLE_SIZE", ge=0)

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("base_currency")
    @classmethod
    def validate_base_currency(cls, v: str) -> str:
        """Validate base currency code."""
        if not validate_currency_code(v):
            raise ValueError("FXCROSS_BASE_CURRENCY must be a 3-letter code")
        return v.upper()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate logging level name."""
        if not validate_log_level(v):
            raise ValueError("LOG_LEVEL must be a logging level name such as INFO or DEBUG")
        return v.upper()

    @model_validator(mode="after")
    def validate_rate_bounds(self) -> "Settings":
        """Ensure the generated rate range is not empty."""
        if self.max_rate <= self.min_rate:
            raise ValueError("FXCROSS_MAX_RATE must be greater than FXCROSS_MIN_RATE")
        return self


# Global settings instance
settings = Settings()
