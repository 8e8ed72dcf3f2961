"""Managed application domain service."""

import random
import re
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Optional

from admindash.domain.entities import (
    AppPlatform,
    AppResources,
    AppStatus,
    ManagedApp,
    StorageUsage,
)
from admindash.domain.errors import NotFoundError, ValidationError, app_not_found
from admindash.utils.ids import next_sequential_id
from admindash.utils.timestamps import utc_now

if TYPE_CHECKING:
    from admindash.scheduler import Scheduler
    from admindash.storage.entity_store import EntityStore

RESOURCE_WINDOW = 30
DEFAULT_APP_STORAGE_GB = 10

ENV_VAR_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def app_task_tag(app_id: int) -> tuple[str, int]:
    """Scheduler tag for deferred work that targets one app."""
    return ("app", app_id)


def validate_env_var(key: str, value: str) -> None:
    """Reject environment variable names that are not shell identifiers.

    Raises:
        ValidationError: If the key is malformed or the value is blank
    """
    if not ENV_VAR_NAME.match(key):
        raise ValidationError(
            f"Invalid environment variable name '{key}': use letters, digits and underscores"
        )
    if not value.strip():
        raise ValidationError(f"Environment variable '{key}' needs a value")


class AppService:
    """Service for managing deployed applications."""

    def __init__(
        self,
        store: "EntityStore",
        scheduler: Optional["Scheduler"] = None,
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
    ):
        """Initialize app service.

        Args:
            store: Entity store
            scheduler: Scheduler holding deferred work for apps; pending
                tasks for an app are cancelled when it is deleted
            clock: Source of the current time
            rng: Random generator for seeding resource history
        """
        self.store = store
        self.scheduler = scheduler
        self.clock = clock
        self.rng = rng or random.Random()

    def list_apps(self, status: Optional[AppStatus] = None) -> list[ManagedApp]:
        return [a for a in self.store.apps if status is None or a.status == status]

    def get_app(self, app_id: int) -> Optional[ManagedApp]:
        for app in self.store.apps:
            if app.id == app_id:
                return app
        return None

    def require_app(self, app_id: int) -> ManagedApp:
        app = self.get_app(app_id)
        if app is None:
            raise NotFoundError(app_not_found(app_id))
        return app

    def _resource_history(self) -> tuple[int, ...]:
        return tuple(self.rng.randint(5, 14) for _ in range(RESOURCE_WINDOW))

    def add_app(self, name: str, platform: AppPlatform, repository: str) -> ManagedApp:
        """Register a new app.

        New apps start Stopped with a fresh resource history and no
        environment variables, deployments or logs.

        Raises:
            ValidationError: If name is blank
        """
        if not name.strip():
            raise ValidationError("App name is required")

        app = ManagedApp(
            id=next_sequential_id(a.id for a in self.store.apps),
            name=name.strip(),
            platform=AppPlatform(platform),
            repository=repository.strip(),
            status=AppStatus.STOPPED,
            last_deployed=self.clock(),
            resources=AppResources(
                cpu=self._resource_history(),
                memory=self._resource_history(),
                storage=StorageUsage(used=0.0, total=float(DEFAULT_APP_STORAGE_GB)),
            ),
            environment_variables={},
            deployments=(),
            logs=(),
        )
        self.store.apps = (app,) + self.store.apps
        return app

    def update_app(self, updated: ManagedApp) -> ManagedApp:
        """Replace an app wholesale.

        Raises:
            NotFoundError: If no app has updated.id
        """
        self.require_app(updated.id)
        self.store.apps = tuple(updated if a.id == updated.id else a for a in self.store.apps)
        return updated

    def delete_app(self, app_id: int) -> None:
        """Remove an app and cancel any deferred work aimed at it.

        Raises:
            NotFoundError: If the app does not exist
        """
        self.require_app(app_id)
        if self.scheduler is not None:
            self.scheduler.cancel_tagged(app_task_tag(app_id))
        self.store.apps = tuple(a for a in self.store.apps if a.id != app_id)

    def set_status(self, app_id: int, status: AppStatus) -> ManagedApp:
        app = self.require_app(app_id)
        return self.update_app(replace(app, status=AppStatus(status)))

    def set_environment_variable(
        self, app_id: int, key: str, value: str, original_key: Optional[str] = None
    ) -> ManagedApp:
        """Add or edit an environment variable.

        Args:
            app_id: App ID
            key: Variable name
            value: Variable value
            original_key: Previous name when renaming an existing variable

        Raises:
            NotFoundError: If the app or original_key does not exist
            ValidationError: If key or value is invalid
        """
        app = self.require_app(app_id)
        validate_env_var(key, value)

        variables = dict(app.environment_variables)
        if original_key is not None and original_key != key:
            if original_key not in variables:
                raise NotFoundError(f"Environment variable '{original_key}' not found on app {app_id}")
            del variables[original_key]
        variables[key] = value
        return self.update_app(replace(app, environment_variables=variables))

    def delete_environment_variable(self, app_id: int, key: str) -> ManagedApp:
        app = self.require_app(app_id)
        if key not in app.environment_variables:
            raise NotFoundError(f"Environment variable '{key}' not found on app {app_id}")
        variables = {k: v for k, v in app.environment_variables.items() if k != key}
        return self.update_app(replace(app, environment_variables=variables))
