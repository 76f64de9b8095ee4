"""Configuration management using pydantic-settings.

Provides environment-based configuration with type safety and validation.
"""

from .settings import (
    ContractSettings,
    LoggingSettings,
    ResultantSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "ContractSettings",
    "LoggingSettings",
    "ResultantSettings",
    "clear_settings_cache",
    "get_settings",
]
