"""
Configuration Management for the Electricity Subsidy Calculator

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The subsidy formula constants are NOT configuration - they live with the
calculator. Only storage and runtime behavior are configurable.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local persistence configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SUBSIDY_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["json_file", "memory"] = Field(
        default="json_file",
        description="Key-value backend: 'json_file' for durable storage, 'memory' for ephemeral"
    )
    file_path: Path = Field(
        default=Path("data/subsidy_store.json"),
        description="Location of the JSON key-value file"
    )
    history_key: str = Field(
        default="calculation_history",
        min_length=1,
        description="Key holding the serialized calculation history"
    )
    history_capacity: int = Field(
        default=50,
        ge=1,
        le=10000,
        description="Maximum number of calculations kept in history"
    )

    @field_validator('file_path')
    @classmethod
    def expand_file_path(cls, v: Path) -> Path:
        """Expand a leading ~ so settings can point into the home directory."""
        return v.expanduser()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    # Dashboard behavior
    trend_window: int = Field(
        default=7,
        ge=1,
        le=50,
        description="How many recent calculations make up the trend"
    )
    currency_symbol: str = Field(
        default="Rs",
        max_length=5,
        description="Symbol used when formatting amounts"
    )

    def format_amount(self, amount: float) -> str:
        """Format an amount the way results are displayed (2 decimal places)."""
        return f"{self.currency_symbol} {amount:.2f}"


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}.
    Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.storage
        results["storage"] = True
    except Exception as e:
        results["storage"] = False
        results["storage_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except Exception as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
