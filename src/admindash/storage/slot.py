"""JSON persistence of single values with date revival.

A slot binds one named value to a StorageBackend key. Values are written as
JSON; datetimes become ISO-8601 strings with milliseconds and are turned
back into datetimes on load. Decimals are written as their exact text. Persistence failures never propagate: the
in-memory value stays authoritative and the next write tries again.
"""

import json
import logging
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar, Union

from admindash.storage.base import StorageBackend, StorageError
from admindash.utils.timestamps import from_iso, is_iso_datetime, to_iso

logger = logging.getLogger(__name__)

T = TypeVar("T")

Encoder = Callable[[Any], Any]
Decoder = Callable[[Any], Any]


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return to_iso(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (set, frozenset)):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def revive_dates(value: Any) -> Any:
    """Walk a decoded JSON value and turn ISO timestamp strings into datetimes."""
    if isinstance(value, str):
        return from_iso(value) if is_iso_datetime(value) else value
    if isinstance(value, list):
        return [revive_dates(item) for item in value]
    if isinstance(value, dict):
        return {key: revive_dates(item) for key, item in value.items()}
    return value


def dumps(value: Any) -> str:
    """Serialize a JSON-compatible value (plus datetimes, Decimals, sets)."""
    return json.dumps(value, default=_json_default, separators=(",", ":"))


def loads(raw: str) -> Any:
    """Parse JSON text, reviving dates and reading floats as Decimal."""
    return revive_dates(json.loads(raw, parse_float=Decimal))


def load(
    storage: StorageBackend,
    key: str,
    default: T,
    decode: Optional[Decoder] = None,
) -> T:
    """Read the value stored under key.

    Returns default when nothing is stored, when the backend fails, or when
    the stored text cannot be parsed or decoded.
    """
    try:
        raw = storage.get_item(key)
    except StorageError as e:
        logger.error("Failed to read key %r from storage: %s", key, e)
        return default

    if raw is None:
        return default

    try:
        value = loads(raw)
        return decode(value) if decode is not None else value
    except (ValueError, KeyError, TypeError, ArithmeticError) as e:
        logger.warning("Failed to parse stored value for key %r, using default: %s", key, e)
        return default


def save(
    storage: StorageBackend,
    key: str,
    value: Any,
    encode: Optional[Encoder] = None,
) -> bool:
    """Write value under key. Returns False (after logging) on failure."""
    try:
        raw = dumps(encode(value) if encode is not None else value)
    except (TypeError, ValueError) as e:
        logger.error("Could not serialize state for key %r: %s", key, e)
        return False

    try:
        storage.set_item(key, raw)
    except StorageError as e:
        logger.error("Error saving state for key %r to storage: %s", key, e)
        return False
    return True


class PersistentSlot(Generic[T]):
    """Stateful handle on one persisted value."""

    def __init__(
        self,
        storage: StorageBackend,
        key: str,
        default: T,
        encode: Optional[Encoder] = None,
        decode: Optional[Decoder] = None,
    ):
        self.storage = storage
        self.key = key
        self.default = default
        self._encode = encode
        self._decode = decode
        self._value: T = load(storage, key, default, decode)

    def get(self) -> T:
        return self._value

    def set(self, value: Union[T, Callable[[T], T]]) -> T:
        """Replace the value (or apply an updater function) and persist it.

        The in-memory value changes first; a failed save leaves it in place.
        """
        if callable(value):
            value = value(self._value)
        self._value = value
        save(self.storage, self.key, value, self._encode)
        return value

    def reload(self) -> T:
        """Re-read the stored value, falling back to the default."""
        self._value = load(self.storage, self.key, self.default, self._decode)
        return self._value


def bind(
    storage: StorageBackend,
    key: str,
    default: T,
    encode: Optional[Encoder] = None,
    decode: Optional[Decoder] = None,
) -> PersistentSlot[T]:
    """Create a PersistentSlot for key, initialized from storage."""
    return PersistentSlot(storage, key, default, encode=encode, decode=decode)
