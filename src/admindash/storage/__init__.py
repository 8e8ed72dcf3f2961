"""Storage layer for admindash application."""

from admindash.storage.base import StorageBackend, StorageError
from admindash.storage.entity_store import EntityStore
from admindash.storage.factories import create_sqlite_storage
from admindash.storage.memory import MemoryStorage

__all__ = [
    "StorageBackend",
    "StorageError",
    "EntityStore",
    "MemoryStorage",
    "create_sqlite_storage",
]
