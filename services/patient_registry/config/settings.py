"""Settings definitions for the patient registry."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Identity of the running registry process."""

    service_name: str = Field(
        default="patient-registry",
        description="Human friendly identifier attached to log entries.",
        validation_alias=AliasChoices("PATIENT_REGISTRY_SERVICE_NAME", "SERVICE_NAME"),
    )

    model_config = SettingsConfigDict(
        env_prefix="PATIENT_REGISTRY_APP_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


class StorageSettings(BaseSettings):
    """Key-value storage backing the patient collection."""

    backend: Literal["memory", "file"] = Field(
        default="memory",
        description="Storage backend: 'memory' for ephemeral, 'file' for a JSON file on disk.",
        validation_alias=AliasChoices("PATIENT_REGISTRY_STORAGE_BACKEND", "STORAGE_BACKEND"),
    )
    path: str = Field(
        default="data/patients.json",
        description="File used by the 'file' backend.",
        validation_alias=AliasChoices("PATIENT_REGISTRY_STORAGE_PATH", "STORAGE_PATH"),
    )
    key: str = Field(
        default="patients",
        description="Storage key holding the serialized patient collection.",
        validation_alias=AliasChoices("PATIENT_REGISTRY_STORAGE_KEY", "STORAGE_KEY"),
    )
    serialize_writes: bool = Field(
        default=False,
        description="Guard each save/delete read-modify-write with an in-process lock.",
        validation_alias=AliasChoices(
            "PATIENT_REGISTRY_STORAGE_SERIALIZE_WRITES", "STORAGE_SERIALIZE_WRITES"
        ),
    )
    quota_bytes: int | None = Field(
        default=None,
        description="Optional byte quota enforced by the 'memory' backend.",
        validation_alias=AliasChoices(
            "PATIENT_REGISTRY_STORAGE_QUOTA_BYTES", "STORAGE_QUOTA_BYTES"
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="PATIENT_REGISTRY_STORAGE_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


class IdentifierSettings(BaseSettings):
    """Patient identifier generation."""

    strategy: Literal["timestamp", "uuid"] = Field(
        default="timestamp",
        description="'timestamp' yields PAT-<ms>-<n>; 'uuid' yields PAT-<128-bit hex>.",
        validation_alias=AliasChoices(
            "PATIENT_REGISTRY_IDENTIFIER_STRATEGY", "IDENTIFIER_STRATEGY"
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="PATIENT_REGISTRY_IDENTIFIER_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


class LoggingSettings(BaseSettings):
    """Logging configuration for the registry."""

    level: str = Field(
        default="info",
        description="Logging verbosity level (e.g. debug, info, warning).",
        validation_alias=AliasChoices("PATIENT_REGISTRY_LOG_LEVEL", "LOG_LEVEL"),
    )

    model_config = SettingsConfigDict(
        env_prefix="PATIENT_REGISTRY_LOG_",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )


class Settings(BaseSettings):
    """Aggregated settings namespace for the patient registry."""

    app: AppSettings = Field(default_factory=AppSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    identifiers: IdentifierSettings = Field(default_factory=IdentifierSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = SettingsConfigDict(
        env_prefix="PATIENT_REGISTRY_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached settings instance."""

    return Settings()


__all__ = [
    "AppSettings",
    "IdentifierSettings",
    "LoggingSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
]
