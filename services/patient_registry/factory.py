"""Build registry components from :class:`Settings`."""

from __future__ import annotations

import threading

from shared.observability import configure_logging

from services.patient_registry.config import Settings, get_settings
from services.patient_registry.identifiers import get_id_generator
from services.patient_registry.intake import PatientIntake
from services.patient_registry.storage import (
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorage,
)
from services.patient_registry.store import RecordStore

__all__ = ["build_intake", "build_record_store", "build_storage"]


def build_storage(settings: Settings | None = None) -> KeyValueStorage:
    """Return the storage backend selected by ``settings.storage.backend``."""

    resolved = settings or get_settings()
    storage_settings = resolved.storage
    if storage_settings.backend == "file":
        return JsonFileStorage(storage_settings.path)
    return InMemoryStorage(quota_bytes=storage_settings.quota_bytes)


def build_record_store(
    settings: Settings | None = None,
    *,
    storage: KeyValueStorage | None = None,
) -> RecordStore:
    resolved = settings or get_settings()
    configure_logging(
        service_name=resolved.app.service_name, level=resolved.logging.level
    )
    lock = threading.RLock() if resolved.storage.serialize_writes else None
    return RecordStore(
        storage if storage is not None else build_storage(resolved),
        key=resolved.storage.key,
        lock=lock,
    )


def build_intake(
    settings: Settings | None = None,
    *,
    storage: KeyValueStorage | None = None,
) -> PatientIntake:
    """Return an intake workflow wired to a store built from ``settings``."""

    resolved = settings or get_settings()
    store = build_record_store(resolved, storage=storage)
    return PatientIntake(
        store, id_generator=get_id_generator(resolved.identifiers.strategy)
    )
