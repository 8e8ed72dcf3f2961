"""Simulated realtime activity.

RealtimeGenerator makes the dashboard look alive: on every tick running
apps drift their resource usage, and with configurable odds a small income
arrives, an app briefly redeploys, or an administrator's session expires.
All mutations go through the domain services, so balances, notifications
and persistence stay consistent with user-driven changes.
"""

import logging
import random
from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from admindash.domain.admin import AdminService
from admindash.domain.app import AppService, app_task_tag
from admindash.domain.entities import AppResources, AppStatus, TransactionType
from admindash.domain.notification import NotificationService
from admindash.domain.transaction import TransactionService
from admindash.settings import SimulationSettings

if TYPE_CHECKING:
    from admindash.scheduler import ScheduledTask, Scheduler
    from admindash.storage.entity_store import EntityStore

logger = logging.getLogger(__name__)

MICRO_INCOME_DESCRIPTION = "Automated Micro-Income"
MICRO_INCOME_CATEGORY = "Other"
AUTO_LOGOUT_IP = "127.0.0.1"


def _clamp(value: float, lower: int, upper: int) -> float:
    return max(lower, min(upper, value))


def _slide(window: tuple[int, ...], sample: int) -> tuple[int, ...]:
    """Append sample, dropping the oldest so the window keeps its length."""
    if not window:
        return (sample,)
    return window[1:] + (sample,)


class RealtimeGenerator:
    """Periodic source of simulated dashboard activity."""

    def __init__(
        self,
        store: "EntityStore",
        apps: AppService,
        transactions: TransactionService,
        notifications: NotificationService,
        admins: AdminService,
        scheduler: "Scheduler",
        settings: Optional[SimulationSettings] = None,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.apps = apps
        self.transactions = transactions
        self.notifications = notifications
        self.admins = admins
        self.scheduler = scheduler
        self.settings = settings or SimulationSettings()
        self.rng = rng or random.Random()
        self._interval: Optional["ScheduledTask"] = None
        self._reverts: list["ScheduledTask"] = []

    @property
    def running(self) -> bool:
        return self._interval is not None and not self._interval.cancelled

    @property
    def interval_task(self) -> Optional["ScheduledTask"]:
        return self._interval

    def start(self) -> "ScheduledTask":
        """Start ticking every settings.tick_interval seconds. Idempotent."""
        if not self.running:
            self._interval = self.scheduler.call_every(self.settings.tick_interval, self.tick)
            logger.info("Realtime generator started (every %.1fs)", self.settings.tick_interval)
        return self._interval

    def pause(self) -> None:
        """Stop ticking but let pending status reverts run."""
        if self._interval is not None:
            self._interval.cancel()
            self._interval = None

    def stop(self) -> None:
        """Stop ticking and drop any pending status reverts."""
        if self._interval is not None:
            self._interval.cancel()
            self._interval = None
        for task in self._reverts:
            task.cancel()
        self._reverts = []
        logger.info("Realtime generator stopped")

    def tick(self) -> None:
        """Run one simulation step against the current store contents."""
        self._reverts = [t for t in self._reverts if not (t.done or t.cancelled)]
        self.drift_resources()
        if self.rng.random() < self.settings.income_probability:
            self.add_micro_income()
        if self.rng.random() < self.settings.flap_probability:
            self.flap_app_status()
        if self.rng.random() < self.settings.churn_probability:
            self.expire_admin_session()

    def _drift(
        self, window: tuple[int, ...], step: float, lower: int, upper: int, fallback: int
    ) -> tuple[int, ...]:
        # A zero sample counts as missing, same as an empty window.
        last = window[-1] if window and window[-1] else fallback
        sample = round(_clamp(last + self.rng.uniform(-step, step), lower, upper))
        return _slide(window, sample)

    def drift_resources(self) -> None:
        """Random-walk cpu and memory of every running app."""
        s = self.settings
        updated = []
        for app in self.store.apps:
            if app.status == AppStatus.RUNNING:
                resources = app.resources
                app = replace(
                    app,
                    resources=AppResources(
                        cpu=self._drift(resources.cpu, s.cpu_step, s.cpu_min, s.cpu_max, s.cpu_fallback),
                        memory=self._drift(
                            resources.memory, s.memory_step, s.memory_min, s.memory_max, s.memory_fallback
                        ),
                        storage=resources.storage,
                    ),
                )
            updated.append(app)
        self.store.apps = tuple(updated)

    def add_micro_income(self) -> None:
        """Deposit a small automated income into the configured account."""
        account = next(
            (a for a in self.store.accounts if a.name == self.settings.income_account_name), None
        )
        amount = Decimal(str(round(self.rng.uniform(0, self.settings.income_max_amount), 2)))
        if account is None:
            logger.debug("Skipping micro-income: no account named %r", self.settings.income_account_name)
            return
        if amount <= 0:
            logger.debug("Skipping micro-income: amount rounded to zero")
            return

        txn = self.transactions.add_transaction(
            description=MICRO_INCOME_DESCRIPTION,
            amount=amount,
            type=TransactionType.INCOME,
            category=MICRO_INCOME_CATEGORY,
            account_id=account.id,
        )
        self.notifications.add_notification(
            "New Transaction",
            f"Received ${txn.amount:.2f} from {txn.description}.",
            icon="dollar-sign",
            icon_color="text-green-400",
        )
        logger.debug("Micro-income of %s into %s", txn.amount, account.name)

    def flap_app_status(self) -> None:
        """Put a random running or failing app into Deploying for a while."""
        apps = self.store.apps
        if not apps:
            return
        app = self.rng.choice(apps)
        if app.status not in (AppStatus.RUNNING, AppStatus.ERROR):
            return

        original = app.status
        self.apps.set_status(app.id, AppStatus.DEPLOYING)
        self._reverts.append(
            self.scheduler.call_later(
                self.settings.flap_revert_delay,
                self._revert_status,
                app.id,
                original,
                tag=app_task_tag(app.id),
            )
        )
        if original == AppStatus.ERROR:
            self.notifications.add_notification(
                "App Recovering",
                f'Attempting to restart app "{app.name}" from error state.',
                icon="exclamation-triangle",
                icon_color="text-yellow-400",
            )
        logger.debug("App %s flapped from %s to Deploying", app.id, original.value)

    def _revert_status(self, app_id: int, original: AppStatus) -> None:
        app = self.apps.get_app(app_id)
        if app is None or app.status != AppStatus.DEPLOYING:
            # Deleted, or a user changed the status in the meantime.
            return
        self.apps.set_status(app_id, original)

    def expire_admin_session(self) -> None:
        """Log a random administrator out for inactivity."""
        admins = self.store.administrators
        if not admins:
            return
        admin = self.rng.choice(admins)
        self.admins.add_activity_log(
            admin.id,
            action="Auto-Logout",
            details="User session timed out due to inactivity.",
            ip_address=AUTO_LOGOUT_IP,
        )
        self.notifications.add_notification(
            "Admin Session Expired",
            f'Administrator "{admin.name}" was automatically logged out.',
            icon="user-clock",
            icon_color="text-gray-400",
        )
        logger.debug("Session of administrator %s expired", admin.id)
