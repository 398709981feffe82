"""Patient record store over a single key-value storage entry.

The whole collection lives under one storage key as a JSON array. Every
mutating call loads the array, changes it in memory and writes it back with
one ``write`` call. Public operations never raise: failures are logged and
reported as ``False`` (writes) or an empty collection (reads).

Without a lock, overlapping writers can lose updates: both read the same
array and the last write wins. Pass ``lock`` to serialize the
read-modify-write within a process.
"""

from __future__ import annotations

import json
from contextlib import nullcontext
from datetime import datetime
from typing import Any, Callable, ContextManager, Mapping

from pydantic import ValidationError

from shared.observability import get_logger, operation_context

from services.patient_registry.models import PatientRecord, utc_timestamp
from services.patient_registry.storage import KeyValueStorage, StorageError

__all__ = ["DEFAULT_STORAGE_KEY", "RecordStore"]

DEFAULT_STORAGE_KEY = "patients"

logger = get_logger(__name__)

RecordInput = PatientRecord | Mapping[str, Any]


class RecordStore:
    """Create, read, update and delete patient records."""

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = DEFAULT_STORAGE_KEY,
        clock: Callable[[], datetime] | None = None,
        lock: ContextManager[Any] | None = None,
    ) -> None:
        self._storage = storage
        self._key = key
        self._clock = clock
        self._lock = lock

    @property
    def key(self) -> str:
        return self._key

    def _now(self) -> str:
        return utc_timestamp(self._clock() if self._clock else None)

    def _guard(self) -> ContextManager[Any]:
        return self._lock if self._lock is not None else nullcontext()

    def _load_raw(self) -> list[dict[str, Any]]:
        try:
            stored = self._storage.read(self._key)
        except Exception:
            logger.exception("patient_collection_read_failed", key=self._key)
            return []
        if not stored:
            return []

        try:
            payload = json.loads(stored)
        except (TypeError, ValueError):
            logger.warning("patient_collection_unparsable", key=self._key)
            return []
        if not isinstance(payload, list):
            logger.warning(
                "patient_collection_not_a_list",
                key=self._key,
                found=type(payload).__name__,
            )
            return []

        entries = [entry for entry in payload if isinstance(entry, dict)]
        if len(entries) != len(payload):
            logger.warning(
                "patient_collection_entries_skipped",
                key=self._key,
                skipped=len(payload) - len(entries),
            )
        return entries

    def _write_raw(self, entries: list[dict[str, Any]]) -> None:
        serialized = json.dumps(entries, ensure_ascii=False, allow_nan=False)
        if self._storage.write(self._key, serialized) is False:
            raise StorageError(f"Storage rejected the write for key '{self._key}'.")

    def list_all(self) -> list[PatientRecord]:
        """Return every stored record in stored order; never raises."""

        records: list[PatientRecord] = []
        for index, entry in enumerate(self._load_raw()):
            try:
                records.append(PatientRecord.model_validate(entry))
            except ValidationError as exc:
                logger.warning(
                    "patient_record_invalid",
                    key=self._key,
                    index=index,
                    patient_id=entry.get("patientId"),
                    error_count=exc.error_count(),
                )
        return records

    def find_by_id(self, patient_id: str) -> PatientRecord | None:
        """Return the first record with ``patient_id`` or ``None``."""

        for record in self.list_all():
            if record.patient_id == patient_id:
                return record
        return None

    def save(self, record: RecordInput) -> bool:
        """Insert ``record`` or merge it over the stored record with its id.

        Only the fields the caller supplied overwrite stored values, so a
        mapping carrying ``patientId`` plus a few keys is a partial update.
        New records get ``createdAt == lastUpdated``; updates keep
        ``createdAt`` and refresh ``lastUpdated``.
        """

        try:
            incoming = _supplied_fields(record)
        except (TypeError, ValueError):
            logger.exception("patient_save_rejected", key=self._key)
            return False

        patient_id = incoming.get("patientId")
        with operation_context("save", patient_id=patient_id):
            try:
                with self._guard():
                    return self._save(incoming, patient_id)
            except Exception:
                logger.exception("patient_save_failed", key=self._key)
                return False

    def _save(self, incoming: dict[str, Any], patient_id: Any) -> bool:
        if not patient_id:
            raise ValueError("A patientId is required to save a patient record.")

        now = self._now()
        entries = self._load_raw()

        for index, existing in enumerate(entries):
            if existing.get("patientId") == patient_id:
                merged = {**existing, **incoming, "lastUpdated": now}
                merged["createdAt"] = existing.get("createdAt") or now
                entries[index] = PatientRecord.model_validate(merged).to_storage()
                action = "updated"
                break
        else:
            created = {**incoming, "createdAt": now, "lastUpdated": now}
            entries.append(PatientRecord.model_validate(created).to_storage())
            action = "created"

        self._write_raw(entries)
        logger.info("patient_saved", action=action, total=len(entries))
        return True

    def delete(self, patient_id: str) -> bool:
        """Remove every record with ``patient_id``; a missing id still succeeds."""

        with operation_context("delete", patient_id=patient_id):
            try:
                with self._guard():
                    entries = [
                        entry
                        for entry in self._load_raw()
                        if entry.get("patientId") != patient_id
                    ]
                    self._write_raw(entries)
            except Exception:
                logger.exception("patient_delete_failed", key=self._key)
                return False
            logger.info("patient_deleted", total=len(entries))
            return True


def _supplied_fields(record: RecordInput) -> dict[str, Any]:
    if isinstance(record, PatientRecord):
        return record.supplied_fields()
    payload: dict[str, Any] = {}
    aliases = {name: field.alias for name, field in PatientRecord.model_fields.items()}
    for key, value in dict(record).items():
        payload[aliases.get(key, key)] = value
    return payload
