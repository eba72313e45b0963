"""
Abstract Storage Interface

DESIGN DECISION: Everything persisted by the app goes through a tiny
key-value interface over named string keys. This allows us to:
1. Use in-memory storage for testing
2. Keep the history and preferences stores backend-agnostic
3. Swap the JSON file for another local store later

The interface is intentionally minimal: get, set, clear.
Values are strings; callers own their serialization.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for local key-value persistence.

    Any storage implementation (in-memory, JSON file, ...)
    must implement these methods.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The key to read

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Completion means the value is durable as far as the backend allows.

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def clear(self, key: str) -> None:
        """
        Remove a key. Removing an absent key is not an error.

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptedDataError(StorageError):
    """Persisted data exists but cannot be parsed."""
    pass
