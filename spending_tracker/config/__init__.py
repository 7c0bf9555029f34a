"""Configuration package."""

from spending_tracker.config.settings import (
    GRANULARITY_VALUES,
    AppSettings,
    ConfigurationError,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "GRANULARITY_VALUES",
    "AppSettings",
    "ConfigurationError",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]
