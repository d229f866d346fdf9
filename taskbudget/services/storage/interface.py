"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract key/value interface for persistence.
This allows us to:
1. Keep the data blob on disk as JSON files
2. Use in-memory storage for testing
3. Swap in another medium without touching the repository

The store knows nothing about entities. It moves JSON-compatible values
in and out under string keys; schema checks happen in the repository.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional


class KeyValueStore(ABC):
    """
    Abstract interface for durable key -> JSON value storage.

    Any storage implementation must implement these methods.
    """

    @abstractmethod
    def load(self, key: str) -> Optional[Any]:
        """
        Load the value stored under a key.

        Args:
            key: Storage key

        Returns:
            The decoded JSON value, or None if nothing is stored

        Raises:
            MalformedDataError: If stored content cannot be decoded
            StorageUnavailableError: If the medium cannot be read
        """
        pass

    @abstractmethod
    def save(self, key: str, value: Any) -> bool:
        """
        Store a JSON-compatible value under a key, replacing any previous one.

        Args:
            key: Storage key
            value: JSON-compatible value

        Returns:
            True if saved, False if the medium is unavailable
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Returns:
            True if something was removed
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class MalformedDataError(StorageError):
    """Stored content could not be decoded."""
    pass


class StorageUnavailableError(StorageError):
    """The storage medium could not be reached."""
    pass
