"""In-memory entity store backed by persistent slots.

The store owns every domain collection. Each collection lives in its own
PersistentSlot under a fixed storage key; assigning a new tuple to a
collection attribute replaces it wholesale and writes it through to the
storage backend. Services in admindash.domain are the only writers.
"""

import logging
from typing import Any, Mapping, Optional

from admindash.domain.entities import MessagePlatform
from admindash.storage import mappers
from admindash.storage.base import StorageBackend, StorageError
from admindash.storage.slot import PersistentSlot

logger = logging.getLogger(__name__)

# attribute name -> (storage key, encoder, decoder)
COLLECTIONS: dict[str, tuple[str, Any, Any]] = {
    "administrators": (
        "administrators",
        mappers.collection_encoder(mappers.administrator_to_document),
        mappers.collection_decoder(mappers.administrator_from_document),
    ),
    "apps": (
        "apps",
        mappers.collection_encoder(mappers.app_to_document),
        mappers.collection_decoder(mappers.app_from_document),
    ),
    "transactions": (
        "transactions",
        mappers.collection_encoder(mappers.transaction_to_document),
        mappers.collection_decoder(mappers.transaction_from_document),
    ),
    "tasks": (
        "tasks",
        mappers.collection_encoder(mappers.task_to_document),
        mappers.collection_decoder(mappers.task_from_document),
    ),
    "notifications": (
        "notifications",
        mappers.collection_encoder(mappers.notification_to_document),
        mappers.collection_decoder(mappers.notification_from_document),
    ),
    "conversations": (
        "conversations",
        mappers.collection_encoder(mappers.conversation_to_document),
        mappers.collection_decoder(mappers.conversation_from_document),
    ),
    "messages": (
        "messages",
        mappers.collection_encoder(mappers.message_to_document),
        mappers.collection_decoder(mappers.message_from_document),
    ),
    "api_keys": (
        "apiKeys",
        mappers.collection_encoder(mappers.api_key_to_document),
        mappers.collection_decoder(mappers.api_key_from_document),
    ),
    "custom_domains": (
        "customDomains",
        mappers.collection_encoder(mappers.custom_domain_to_document),
        mappers.collection_decoder(mappers.custom_domain_from_document),
    ),
    "accounts": (
        "accounts",
        mappers.collection_encoder(mappers.account_to_document),
        mappers.collection_decoder(mappers.account_from_document),
    ),
    "budgets": (
        "budgets",
        mappers.collection_encoder(mappers.budget_to_document),
        mappers.collection_decoder(mappers.budget_from_document),
    ),
    "recurring_transactions": (
        "recurringTransactions",
        mappers.collection_encoder(mappers.recurring_transaction_to_document),
        mappers.collection_decoder(mappers.recurring_transaction_from_document),
    ),
    "current_user": (
        "currentUser",
        mappers.optional_encoder(mappers.administrator_to_document),
        mappers.optional_decoder(mappers.administrator_from_document),
    ),
}


class _Collection:
    """Descriptor exposing a slot's value as a plain attribute."""

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, store, owner=None):
        if store is None:
            return self
        return store._slots[self.name].get()

    def __set__(self, store, value):
        store._slots[self.name].set(value)


class EntityStore:
    """Single source of truth for all dashboard collections."""

    administrators = _Collection()
    apps = _Collection()
    transactions = _Collection()
    tasks = _Collection()
    notifications = _Collection()
    conversations = _Collection()
    messages = _Collection()
    api_keys = _Collection()
    custom_domains = _Collection()
    accounts = _Collection()
    budgets = _Collection()
    recurring_transactions = _Collection()
    current_user = _Collection()

    def __init__(self, storage: StorageBackend, defaults: Optional[Mapping[str, Any]] = None):
        """Initialize the store, loading every collection from storage.

        Args:
            storage: Backend holding the persisted collections
            defaults: Value per collection name used when nothing is stored.
                Missing names default to an empty tuple (None for current_user).
                When omitted entirely, the seed data set is used.
        """
        if defaults is None:
            from admindash.seed import build_seed_data

            defaults = build_seed_data()

        unknown = set(defaults) - set(COLLECTIONS)
        if unknown:
            raise ValueError(f"Unknown collection(s): {', '.join(sorted(unknown))}")

        self.storage = storage
        self._slots: dict[str, PersistentSlot] = {}
        for name, (key, encode, decode) in COLLECTIONS.items():
            default = defaults.get(name, None if name == "current_user" else ())
            self._slots[name] = PersistentSlot(storage, key, default, encode=encode, decode=decode)

        self.is_loading = False
        self.typing_status: dict[int, bool] = {}
        self.active_platform = MessagePlatform.DEFAULT

    def slot(self, name: str) -> PersistentSlot:
        """Return the slot backing a collection attribute."""
        return self._slots[name]

    def storage_keys(self) -> list[str]:
        return [key for key, _, _ in COLLECTIONS.values()]

    def reload(self) -> None:
        """Re-read every collection from storage."""
        for slot in self._slots.values():
            slot.reload()

    def clear_and_reload(self) -> None:
        """Drop all persisted state and reload defaults.

        Session flags are reset as well. A failing backend is logged; the
        in-memory collections still return to their defaults.
        """
        try:
            self.storage.clear()
        except StorageError as e:
            logger.error("Failed to clear storage during reset: %s", e)
            for slot in self._slots.values():
                slot.set(slot.default)
        else:
            self.reload()
        self.typing_status = {}
        self.active_platform = MessagePlatform.DEFAULT
        self.is_loading = False
