"""API key domain service."""

import secrets
import string
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from admindash.domain.admin import validate_permissions
from admindash.domain.entities import ApiKey, ApiKeyStatus
from admindash.domain.errors import NotFoundError, ValidationError, api_key_not_found
from admindash.utils.timestamps import timestamp_millis, utc_now

if TYPE_CHECKING:
    from admindash.storage.entity_store import EntityStore

SECRET_PREFIX = "sark_live_"
SECRET_LENGTH = 30
SECRET_ALPHABET = string.digits + string.ascii_lowercase


def generate_secret() -> str:
    """Return a fresh live-mode secret."""
    return SECRET_PREFIX + "".join(secrets.choice(SECRET_ALPHABET) for _ in range(SECRET_LENGTH))


class ApiKeyService:
    """Service for issuing and revoking API keys."""

    def __init__(self, store: "EntityStore", clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def list_api_keys(self) -> list[ApiKey]:
        return list(self.store.api_keys)

    def get_api_key(self, key_id: str) -> Optional[ApiKey]:
        for api_key in self.store.api_keys:
            if api_key.id == key_id:
                return api_key
        return None

    def require_api_key(self, key_id: str) -> ApiKey:
        api_key = self.get_api_key(key_id)
        if api_key is None:
            raise NotFoundError(api_key_not_found(key_id))
        return api_key

    def add_api_key(self, name: str, scopes: Iterable[str]) -> ApiKey:
        """Issue a new active key.

        The returned key carries the full secret; callers should show it
        once.

        Args:
            name: Human-readable label
            scopes: Permission names granted to the key

        Raises:
            ValidationError: If name is blank or a scope is unknown
        """
        if not name.strip():
            raise ValidationError("API key name is required")
        granted = validate_permissions(scopes)

        now = self.clock()
        key_id = f"key-{timestamp_millis(now)}"
        # Two keys created within the same millisecond would collide.
        existing = {k.id for k in self.store.api_keys}
        suffix = 1
        base_id = key_id
        while key_id in existing:
            key_id = f"{base_id}-{suffix}"
            suffix += 1

        api_key = ApiKey(
            id=key_id,
            name=name.strip(),
            key=generate_secret(),
            status=ApiKeyStatus.ACTIVE,
            scopes=granted,
            created_at=now,
            last_used=None,
        )
        self.store.api_keys = self.store.api_keys + (api_key,)
        return api_key

    def revoke_api_key(self, key_id: str) -> ApiKey:
        api_key = self.require_api_key(key_id)
        revoked = replace(api_key, status=ApiKeyStatus.REVOKED)
        self.store.api_keys = tuple(revoked if k.id == key_id else k for k in self.store.api_keys)
        return revoked

    def delete_api_key(self, key_id: str) -> None:
        self.require_api_key(key_id)
        self.store.api_keys = tuple(k for k in self.store.api_keys if k.id != key_id)
