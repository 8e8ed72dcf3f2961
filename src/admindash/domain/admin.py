"""Administrator domain service."""

import random
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Iterable, Optional

from admindash.domain.entities import (
    ActivityLog,
    Administrator,
    AdministratorRole,
    AdministratorStatus,
    StorageUsage,
)
from admindash.domain.errors import NotFoundError, ValidationError, admin_not_found, unknown_permissions
from admindash.utils.ids import next_sequential_id, timestamp_id
from admindash.utils.timestamps import utc_now

if TYPE_CHECKING:
    from admindash.storage.entity_store import EntityStore

PERMISSIONS = (
    "manage_users",
    "view_reports",
    "edit_settings",
    "manage_billing",
    "access_logs",
    "deploy_apps",
    "manage_database",
    "sudo_access",
    "api_access",
    "delete_content",
    "moderate_comments",
    "manage_support_tickets",
)

DEFAULT_STORAGE_QUOTA_GB = 25


def validate_permissions(names: Iterable[str]) -> frozenset[str]:
    """Return names as a de-duplicated set, rejecting unknown permission names.

    Raises:
        ValidationError: If any name is not in PERMISSIONS
    """
    requested = frozenset(names)
    unknown = requested - set(PERMISSIONS)
    if unknown:
        raise ValidationError(unknown_permissions(set(unknown)))
    return requested


class AdminService:
    """Service for managing administrators and the current session."""

    def __init__(
        self,
        store: "EntityStore",
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
    ):
        """Initialize administrator service.

        Args:
            store: Entity store
            clock: Source of the current time
            rng: Random generator used for id tiebreaks
        """
        self.store = store
        self.clock = clock
        self.rng = rng or random.Random()

    def list_admins(self) -> list[Administrator]:
        return list(self.store.administrators)

    def get_admin(self, admin_id: int) -> Optional[Administrator]:
        """Get administrator by ID, or None if not found."""
        for admin in self.store.administrators:
            if admin.id == admin_id:
                return admin
        return None

    def require_admin(self, admin_id: int) -> Administrator:
        admin = self.get_admin(admin_id)
        if admin is None:
            raise NotFoundError(admin_not_found(admin_id))
        return admin

    def add_admin(self, name: str, email: str, role: AdministratorRole) -> Administrator:
        """Create an administrator with default status, permissions and quota.

        Args:
            name: Display name
            email: Contact email
            role: Administrator role

        Returns:
            The created administrator

        Raises:
            ValidationError: If name or email is blank
        """
        if not name.strip() or not email.strip():
            raise ValidationError("Administrator name and email are required")

        new_id = next_sequential_id(a.id for a in self.store.administrators)
        admin = Administrator(
            id=new_id,
            name=name.strip(),
            email=email.strip(),
            role=AdministratorRole(role),
            status=AdministratorStatus.ACTIVE,
            avatar_url=f"https://i.pravatar.cc/150?u={new_id}",
            last_login=self.clock(),
            two_factor_enabled=False,
            permissions=frozenset(),
            activity_logs=(),
            storage_usage=StorageUsage(used=0.0, total=float(DEFAULT_STORAGE_QUOTA_GB)),
        )
        self.store.administrators = self.store.administrators + (admin,)
        return admin

    def update_admin(self, updated: Administrator) -> Administrator:
        """Replace an administrator wholesale.

        Raises:
            NotFoundError: If no administrator has updated.id
            ValidationError: If the permissions contain unknown names
        """
        self.require_admin(updated.id)
        updated = replace(updated, permissions=validate_permissions(updated.permissions))
        self.store.administrators = tuple(
            updated if a.id == updated.id else a for a in self.store.administrators
        )
        current = self.store.current_user
        if current is not None and current.id == updated.id:
            self.store.current_user = updated
        return updated

    def delete_admin(self, admin_id: int) -> None:
        """Remove an administrator.

        Conversations that reference the administrator keep their copied
        contact details. If the administrator is signed in, the session ends.

        Raises:
            NotFoundError: If the administrator does not exist
        """
        self.require_admin(admin_id)
        self.store.administrators = tuple(
            a for a in self.store.administrators if a.id != admin_id
        )
        current = self.store.current_user
        if current is not None and current.id == admin_id:
            self.store.current_user = None

    def set_permissions(self, admin_id: int, permissions: Iterable[str]) -> Administrator:
        admin = self.require_admin(admin_id)
        return self.update_admin(replace(admin, permissions=validate_permissions(permissions)))

    def add_activity_log(
        self, admin_id: int, action: str, details: str, ip_address: str
    ) -> ActivityLog:
        """Prepend an activity log entry to an administrator.

        Raises:
            NotFoundError: If the administrator does not exist
        """
        admin = self.require_admin(admin_id)
        now = self.clock()
        log = ActivityLog(
            id=timestamp_id(now, self.rng),
            timestamp=now,
            action=action,
            details=details,
            ip_address=ip_address,
        )
        self.update_admin(replace(admin, activity_logs=(log,) + admin.activity_logs))
        return log

    @property
    def current_user(self) -> Optional[Administrator]:
        return self.store.current_user

    def login(self, admin_id: int) -> Administrator:
        admin = self.require_admin(admin_id)
        admin = self.update_admin(replace(admin, last_login=self.clock()))
        self.store.current_user = admin
        return admin

    def logout(self) -> None:
        self.store.current_user = None
