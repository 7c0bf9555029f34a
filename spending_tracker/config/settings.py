"""
Configuration Management for Spending Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Anything that would otherwise be inferred from the runtime (week start day,
storage location, the "Others" label) is pinned as an explicit setting.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


GRANULARITY_VALUES = ("Daily", "Weekly", "Monthly")


class ConfigurationError(Exception):
    """Invalid configuration reached the core (a programming error, not user input)."""
    pass


class StorageSettings(BaseSettings):
    """Key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="SPENDING_STORAGE_",
        extra="ignore"
    )

    backend: str = Field(
        default="file",
        pattern="^(file|memory)$",
        description="Storage backend: 'file' (JSON file) or 'memory'"
    )
    path: str = Field(
        default="~/.spending_tracker/local_storage.json",
        description="Location of the JSON file used by the 'file' backend"
    )

    # Keys within the store
    records_key: str = Field(
        default="spendingData",
        min_length=1,
        description="Key holding the serialized spending records"
    )
    categories_key: str = Field(
        default="customCategories",
        min_length=1,
        description="Key holding the serialized custom categories"
    )

    @property
    def resolved_path(self) -> Path:
        """Storage path with the user directory expanded."""
        return Path(self.path).expanduser()


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

    # Aggregation
    week_start_day: int = Field(
        default=6,
        ge=0,
        le=6,
        description="First day of the week (0=Monday ... 6=Sunday)"
    )
    default_granularity: str = Field(
        default="Monthly",
        description="Granularity shown when a session starts"
    )

    # Categories
    others_label: str = Field(
        default="Others",
        min_length=1,
        description="Category label that asks the user for a custom name"
    )
    predefined_categories_path: Optional[str] = Field(
        default=None,
        description="JSON file of {category: str} entries; packaged list if unset"
    )

    # Display
    currency_symbol: str = Field(
        default="$",
        description="Currency symbol used by the UI"
    )

    @field_validator('default_granularity')
    @classmethod
    def validate_default_granularity(cls, v: str) -> str:
        """Only the three known granularities are allowed."""
        if v not in GRANULARITY_VALUES:
            raise ValueError(
                f"Unsupported granularity: {v}. Allowed: {', '.join(GRANULARITY_VALUES)}"
            )
        return v


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
