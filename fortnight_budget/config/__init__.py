"""Configuration package."""

from fortnight_budget.config.settings import AppSettings, get_settings

__all__ = [
    "AppSettings",
    "get_settings",
]
