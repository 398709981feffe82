"""JSON file storage backend keeping every key in a single document."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from services.patient_registry.storage.interfaces import StorageError


class JsonFileStorage:
    """Persist a ``{key: value}`` string map as one JSON object on disk.

    Every write rewrites the whole document through a temporary file that is
    moved into place, so readers never observe a partially written file.
    """

    def __init__(self, path: str | Path, *, encoding: str = "utf-8") -> None:
        self._path = Path(path)
        self._encoding = encoding

    @property
    def path(self) -> Path:
        """Return the backing file path."""

        return self._path

    def read(self, key: str) -> str | None:
        value = self._load().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise StorageError(f"Value stored under '{key}' in {self._path} is not a string.")
        return value

    def write(self, key: str, value: str) -> bool:
        document = self._load()
        document[key] = value
        self._dump(document)
        return True

    def _load(self) -> dict[str, object]:
        try:
            text = self._path.read_text(encoding=self._encoding)
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StorageError(f"Unable to read {self._path}: {exc.strerror or exc}") from exc

        if not text.strip():
            return {}
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise StorageError(f"{self._path}: invalid JSON ({exc.msg})") from exc
        if not isinstance(payload, dict):
            raise StorageError(f"{self._path}: top-level JSON payload must be an object")
        return payload

    def _dump(self, document: dict[str, object]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding=self._encoding) as handle:
                json.dump(document, handle, ensure_ascii=False)
            os.replace(tmp_name, self._path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StorageError(f"Unable to write {self._path}: {exc.strerror or exc}") from exc


__all__ = ["JsonFileStorage"]
