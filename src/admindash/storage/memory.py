"""In-memory storage backend."""

from typing import Optional

from admindash.storage.base import StorageBackend, StorageError


class MemoryStorage(StorageBackend):
    """Dict-backed storage.

    quota_bytes caps the total size of stored values and makes writes past
    it fail the way a full browser-style store does. Setting available to
    False makes every call fail.
    """

    def __init__(self, quota_bytes: Optional[int] = None):
        self.quota_bytes = quota_bytes
        self.available = True
        self._items: dict[str, str] = {}

    def _check_available(self) -> None:
        if not self.available:
            raise StorageError("Storage is disabled")

    def connect(self) -> None:
        pass

    def disconnect(self) -> None:
        pass

    def get_item(self, key: str) -> Optional[str]:
        self._check_available()
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._check_available()
        if self.quota_bytes is not None:
            used = sum(len(v.encode()) for k, v in self._items.items() if k != key)
            if used + len(value.encode()) > self.quota_bytes:
                raise StorageError(f"Quota exceeded while writing '{key}'")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._check_available()
        self._items.pop(key, None)

    def clear(self) -> None:
        self._check_available()
        self._items.clear()

    def keys(self) -> list[str]:
        self._check_available()
        return sorted(self._items)
