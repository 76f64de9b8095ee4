"""Environment-based configuration using pydantic-settings.

Settings only affect the ambient behaviour of the package: how contract
violations are reported and how the package logger renders. They never
change what a Result combinator returns.

Example:
    >>> from resultant.config import get_settings
    >>> settings = get_settings()
    >>> settings.contracts.log_violations
    True
    >>> settings.logging.level
    'WARNING'

    # Or with environment variables:
    # RESULTANT_LOG_LEVEL=DEBUG
    # RESULTANT_CONTRACT_REPR_LIMIT=80
"""

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingSettings(BaseSettings):
    """Logging configuration."""
    
    model_config = SettingsConfigDict(
        env_prefix="RESULTANT_LOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    level: LogLevel = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    
    @field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _lower_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class ContractSettings(BaseSettings):
    """How contract violations are reported."""
    
    model_config = SettingsConfigDict(
        env_prefix="RESULTANT_CONTRACT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    log_violations: bool = Field(default=True, description="Log each violation before raising it")
    repr_limit: Annotated[int, Field(ge=20, le=10_000)] = Field(
        default=200,
        description="Max characters of payload repr kept in a violation",
    )


class ResultantSettings(BaseSettings):
    """Root settings for the resultant package.
    
    Loads configuration from environment variables with RESULTANT_ prefix.
    Supports nested configuration and .env files.
    
    Example environment variables:
        RESULTANT_DEBUG=true
        RESULTANT_LOG_FORMAT=json
        RESULTANT_CONTRACT_LOG_VIOLATIONS=false
    """
    
    model_config = SettingsConfigDict(
        env_prefix="RESULTANT_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )
    
    debug: bool = Field(default=False, description="Force DEBUG logging")
    
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    contracts: ContractSettings = Field(default_factory=ContractSettings)
    
    @computed_field
    @property
    def effective_log_level(self) -> LogLevel:
        """Log level after applying the debug override."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> ResultantSettings:
    """Get the global settings instance (cached).
    
    Example:
        >>> get_settings().debug
        False
    """
    return ResultantSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).
    
    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()
