"""Abstract key-value storage interface."""

from abc import ABC, abstractmethod
from typing import Optional


class StorageError(Exception):
    """Storage backend is unavailable or refused a read/write."""


class StorageBackend(ABC):
    """Abstract string key-value storage used to persist store collections."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the backend."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the backend."""
        pass

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """Return the raw value stored under key, or None if absent."""
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Remove key. Removing a missing key is not an error."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every key."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys in sorted order."""
        pass
