"""
Abstract Key-Value Store Interface

DESIGN DECISION: The ledger talks to its persistent store through a tiny
async key-value contract. This allows us to:
1. Use the device's storage API from the app and a JSON directory here
2. Use in-memory storage for testing
3. Keep business logic decoupled from how bytes hit the disk

Every collection is one JSON array under one key. There are no queries;
the repository reads the whole array and filters in Python.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional


class KeyValueStore(ABC):
    """
    Abstract interface for the persistent string store.

    Any storage implementation (device storage, files, a database table)
    must implement these methods.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StoreReadError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Store a value, replacing whatever was there.

        Raises:
            StoreWriteError: If the value cannot be written
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a key. Removing an absent key is not an error."""
        pass

    @abstractmethod
    async def delete_many(self, keys: Iterable[str]) -> None:
        """Remove several keys."""
        pass

    @abstractmethod
    async def list_keys(self) -> list[str]:
        """All keys currently stored."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StoreReadError(StorageError):
    """The backend could not be read."""
    pass


class StoreWriteError(StorageError):
    """The backend could not be written."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class CorruptDataError(StorageError):
    """A stored value is not the JSON shape we expect."""
    pass
