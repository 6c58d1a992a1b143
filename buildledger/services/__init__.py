"""
Services package.

``buildledger.services.storage`` holds the key-value store boundary.
``buildledger.services.repository`` holds the collection CRUD built on it
and is imported directly, since it depends on the audit logger.
"""

from buildledger.services.storage import (
    CorruptDataError,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    NotFoundError,
    StorageError,
    StoreReadError,
    StoreWriteError,
    create_store,
)

__all__ = [
    # Storage services
    "CorruptDataError",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "NotFoundError",
    "StorageError",
    "StoreReadError",
    "StoreWriteError",
    "create_store",
]
