"""
Token Storage Port - Interface for durable token persistence.

Implementations:
- FileTokenStorage: One file per key on local disk
- RedisTokenStorage: Redis-backed storage
- MemoryTokenStorage: In-memory storage (testing only)
"""

from abc import ABC, abstractmethod
from typing import Optional


class TokenStoragePort(ABC):
    """
    Port: Whole-value get/set/delete of string values.

    Backends must not expose partial writes. Any backend failure is
    raised as StorageError.
    """

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            Stored value, or None if nothing is stored

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """
        Replace the value stored under key.

        Args:
            key: Storage key
            value: Value to store

        Raises:
            StorageError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete a value.

        Args:
            key: Storage key

        Returns:
            True if deleted, False if nothing was stored

        Raises:
            StorageError: If the backend cannot be written
        """
        pass
