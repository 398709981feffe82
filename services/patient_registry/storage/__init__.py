"""Key-value storage backends for the patient registry."""

from .interfaces import KeyValueStorage, QuotaExceededError, StorageError
from .jsonfile import JsonFileStorage
from .memory import InMemoryStorage

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorage",
    "QuotaExceededError",
    "StorageError",
]
