"""
Configuration Management for Fortnight Budget

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The defaults below seed the "default" settings row the first time
storage is initialized; after that the stored row wins.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from fortnight_budget.models.budget import ThemeType


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
    log_level: str = Field(
        default="INFO",
        description="Minimum level for local structured logs"
    )

    # Seeds for the stored settings row
    default_currency: str = Field(
        default="AUD",
        description="Currency for new budgets (only AUD is supported)"
    )
    default_date_format: str = Field(
        default="dd/MM/yyyy",
        description="Display format for dates"
    )
    default_theme: ThemeType = Field(
        default=ThemeType.SYSTEM,
        description="Colour theme for new budgets"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.upper()
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {allowed}")
        return level

    @field_validator("default_currency")
    @classmethod
    def validate_currency(cls, v: str) -> str:
        if v.upper() != "AUD":
            raise ValueError("Only AUD is supported")
        return v.upper()


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return AppSettings()
