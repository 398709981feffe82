"""In-memory storage backend."""

from __future__ import annotations

from typing import Mapping

from services.patient_registry.storage.interfaces import QuotaExceededError


class InMemoryStorage:
    """Dictionary backed key-value storage with an optional byte quota.

    The quota counts the UTF-16 size of every stored key and value, the way
    browsers account for local storage.
    """

    def __init__(
        self,
        initial: Mapping[str, str] | None = None,
        *,
        quota_bytes: int | None = None,
    ) -> None:
        self._values: dict[str, str] = dict(initial or {})
        self._quota = quota_bytes

    @property
    def values(self) -> dict[str, str]:
        """Return a snapshot of the stored values."""

        return dict(self._values)

    def read(self, key: str) -> str | None:
        return self._values.get(key)

    def write(self, key: str, value: str) -> bool:
        if self._quota is not None:
            pending = dict(self._values)
            pending[key] = value
            size = sum(_utf16_size(k) + _utf16_size(v) for k, v in pending.items())
            if size > self._quota:
                raise QuotaExceededError(key, size=size, quota=self._quota)
        self._values[key] = value
        return True


def _utf16_size(text: str) -> int:
    return len(text.encode("utf-16-le"))


__all__ = ["InMemoryStorage"]
