"""Configuration package for the patient registry."""

from .settings import (
    AppSettings,
    IdentifierSettings,
    LoggingSettings,
    Settings,
    StorageSettings,
    get_settings,
)

__all__ = [
    "AppSettings",
    "IdentifierSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
