"""Object graph for one dashboard session.

A Workspace wires a storage backend, the entity store, a scheduler, every
domain service and the realtime generator together. Nothing in admindash is
a module-level singleton; tests and the CLI each build their own workspace.
"""

import logging
import random
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from admindash.domain import (
    AccountService,
    AdminService,
    ApiKeyService,
    AppService,
    BudgetService,
    CustomDomainService,
    MessagingService,
    NotificationService,
    TaskService,
    TransactionService,
)
from admindash.domain import summary
from admindash.domain.entities import DashboardSummary, SearchResults
from admindash.realtime import RealtimeGenerator
from admindash.scheduler import ManualScheduler, ScheduledTask, Scheduler
from admindash.settings import ServiceTimings, SimulationSettings
from admindash.storage.base import StorageBackend
from admindash.storage.entity_store import EntityStore
from admindash.storage.factories import create_sqlite_storage
from admindash.utils.timestamps import utc_now

logger = logging.getLogger(__name__)


class Workspace:
    """Everything needed to read and change dashboard state."""

    def __init__(
        self,
        storage: StorageBackend,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
        settings: Optional[SimulationSettings] = None,
        timings: Optional[ServiceTimings] = None,
        defaults: Optional[Mapping[str, Any]] = None,
    ):
        """Build the workspace and load persisted state.

        Args:
            storage: Backend holding the persisted collections
            scheduler: Timer source (defaults to a ManualScheduler)
            rng: Random generator shared by services and the generator
            clock: Source of the current time
            settings: Realtime generator settings
            timings: Delays for domain verification, chat replies and reset
            defaults: Collection defaults (defaults to the seed data)
        """
        self.storage = storage
        self.scheduler = scheduler or ManualScheduler()
        self.rng = rng or random.Random()
        self.clock = clock
        self.timings = timings or ServiceTimings()

        self.storage.connect()
        self.store = EntityStore(storage, defaults=defaults)

        self.notifications = NotificationService(self.store, clock=clock, rng=self.rng)
        self.admins = AdminService(self.store, clock=clock, rng=self.rng)
        self.apps = AppService(self.store, scheduler=self.scheduler, clock=clock, rng=self.rng)
        self.accounts = AccountService(self.store)
        self.transactions = TransactionService(self.store, clock=clock, rng=self.rng)
        self.budgets = BudgetService(self.store)
        self.tasks = TaskService(self.store)
        self.messaging = MessagingService(
            self.store, self.scheduler, clock=clock, rng=self.rng, timings=self.timings
        )
        self.api_keys = ApiKeyService(self.store, clock=clock)
        self.domains = CustomDomainService(
            self.store, self.notifications, self.scheduler, rng=self.rng, timings=self.timings
        )
        self.generator = RealtimeGenerator(
            self.store,
            self.apps,
            self.transactions,
            self.notifications,
            self.admins,
            self.scheduler,
            settings=settings,
            rng=self.rng,
        )

    def start(self) -> None:
        """Start the realtime generator."""
        self.generator.start()

    def shutdown(self) -> None:
        """Cancel all pending work and release the storage backend."""
        self.generator.stop()
        self.scheduler.cancel_all()
        self.storage.disconnect()

    def reset_all_data(self) -> ScheduledTask:
        """Wipe persisted state and return to the defaults.

        The store reports is_loading until the reset runs, one reset delay
        later. Pending timers other than the generator's interval are
        cancelled at that point.
        """
        self.store.is_loading = True
        logger.info("Resetting all data in %.1fs", self.timings.reset_delay)
        return self.scheduler.call_later(self.timings.reset_delay, self._perform_reset)

    def _perform_reset(self) -> None:
        keep = [self.generator.interval_task] if self.generator.running else []
        cancelled = self.scheduler.cancel_all(keep=keep)
        self.store.clear_and_reload()
        logger.info("Reset complete (%d pending task(s) cancelled)", cancelled)

    def dashboard(self) -> DashboardSummary:
        store = self.store
        return summary.dashboard_summary(
            store.apps,
            store.tasks,
            store.notifications,
            store.accounts,
            store.transactions,
            now=self.clock(),
        )

    def search(self, query: str) -> SearchResults:
        store = self.store
        return summary.search(
            query,
            store.apps,
            store.administrators,
            store.transactions,
            store.tasks,
            store.notifications,
        )


def create_workspace(
    database_path: Optional[str] = None,
    scheduler: Optional[Scheduler] = None,
    rng: Optional[random.Random] = None,
) -> Workspace:
    """Create a workspace persisted to SQLite.

    Args:
        database_path: SQLite file; see create_sqlite_storage for the fallbacks
        scheduler: Timer source (defaults to a ManualScheduler)
        rng: Random generator

    Returns:
        Workspace instance
    """
    return Workspace(create_sqlite_storage(database_path), scheduler=scheduler, rng=rng)
