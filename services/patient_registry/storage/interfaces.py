"""Protocol and error types for patient registry storage backends."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class StorageError(RuntimeError):
    """Base error for storage layer operations."""


class QuotaExceededError(StorageError):
    """Raised when a write would exceed the backend's capacity."""

    def __init__(self, key: str, *, size: int, quota: int) -> None:
        super().__init__(
            f"Writing {size} bytes under '{key}' exceeds the storage quota of {quota} bytes."
        )
        self.key = key
        self.size = size
        self.quota = quota


@runtime_checkable
class KeyValueStorage(Protocol):
    """String key-value store in the shape of a browser's local storage."""

    def read(self, key: str) -> str | None:
        """Return the value stored under ``key`` or ``None`` when absent."""

    def write(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``; return ``False`` or raise on failure."""


__all__ = ["KeyValueStorage", "QuotaExceededError", "StorageError"]
