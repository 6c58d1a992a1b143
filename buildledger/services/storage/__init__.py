"""
Storage Services Package

Provides the abstract key-value store interface and concrete
implementations. The file backend is the default; the in-memory backend
is used by tests. Designed to be swappable.
"""

from typing import Optional

from buildledger.config.settings import StorageSettings
from buildledger.services.storage.interface import (
    CorruptDataError,
    KeyValueStore,
    NotFoundError,
    StorageError,
    StoreReadError,
    StoreWriteError,
)
from buildledger.services.storage.file_store import JsonFileKeyValueStore
from buildledger.services.storage.memory import InMemoryKeyValueStore


def create_store(settings: Optional[StorageSettings] = None) -> KeyValueStore:
    """Build the key-value store selected by BUILDLEDGER_STORAGE_BACKEND."""
    settings = settings or StorageSettings()
    if settings.backend == "memory":
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(
        settings.data_dir,
        retry_attempts=settings.retry_attempts,
    )


__all__ = [
    # Interface
    "KeyValueStore",
    "create_store",
    # Exceptions
    "CorruptDataError",
    "NotFoundError",
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
