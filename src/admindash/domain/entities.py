"""Domain model entities for admindash.

These are pure, immutable data classes. Services never mutate an entity in
place: every change produces a new instance via dataclasses.replace and the
owning collection is swapped wholesale, which keeps timer callbacks and user
operations from observing half-applied updates.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional


class AdministratorRole(str, Enum):
    SYSTEM_ADMINISTRATOR = "System Administrator"
    MANAGER = "Manager"
    SUPPORT_STAFF = "Support Staff"


class AdministratorStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"


class AppPlatform(str, Enum):
    WEB_APP = "Web App"
    API_SERVICE = "API Service"
    MOBILE_APP = "Mobile App"
    DATABASE = "Database"


class AppStatus(str, Enum):
    RUNNING = "Running"
    STOPPED = "Stopped"
    DEPLOYING = "Deploying"
    ERROR = "Error"


class DeploymentStatus(str, Enum):
    SUCCESS = "Success"
    FAILED = "Failed"


class LogLevel(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class AccountType(str, Enum):
    CHECKING = "Checking"
    SAVINGS = "Savings"
    CREDIT_CARD = "Credit Card"


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class MessagePlatform(str, Enum):
    DEFAULT = "default"
    WHATSAPP = "whatsapp"
    MESSENGER = "messenger"


class ContactStatus(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"
    AWAY = "away"


class MessageSender(str, Enum):
    ME = "me"
    CONTACT = "contact"


class ApiKeyStatus(str, Enum):
    ACTIVE = "Active"
    REVOKED = "Revoked"


class DomainStatus(str, Enum):
    PENDING = "Pending"
    VERIFYING = "Verifying"
    VERIFIED = "Verified"


class RecurrenceFrequency(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass(frozen=True)
class StorageUsage:
    """Used and total capacity in GB. used <= total is not enforced."""

    used: float
    total: float


@dataclass(frozen=True)
class ActivityLog:
    id: int
    timestamp: datetime
    action: str
    details: str
    ip_address: str


@dataclass(frozen=True)
class Administrator:
    """Dashboard administrator; also the contact directory for messaging."""

    id: int
    name: str
    email: str
    role: AdministratorRole
    status: AdministratorStatus
    avatar_url: str
    last_login: datetime
    two_factor_enabled: bool
    permissions: frozenset[str]
    activity_logs: tuple[ActivityLog, ...]
    storage_usage: StorageUsage


@dataclass(frozen=True)
class Deployment:
    id: int
    version: str
    timestamp: datetime
    status: DeploymentStatus


@dataclass(frozen=True)
class LogEntry:
    id: int
    timestamp: datetime
    level: LogLevel
    message: str


@dataclass(frozen=True)
class AppResources:
    """Sliding windows of recent cpu/memory samples plus storage usage."""

    cpu: tuple[int, ...]
    memory: tuple[int, ...]
    storage: StorageUsage


@dataclass(frozen=True)
class ManagedApp:
    id: int
    name: str
    platform: AppPlatform
    repository: str
    status: AppStatus
    last_deployed: datetime
    resources: AppResources
    environment_variables: Mapping[str, str] = field(default_factory=dict)
    deployments: tuple[Deployment, ...] = ()
    logs: tuple[LogEntry, ...] = ()


@dataclass(frozen=True)
class Transaction:
    """Money movement. amount is always positive; type carries the sign."""

    id: int
    description: str
    amount: Decimal
    type: TransactionType
    category: str
    account_id: int
    date: datetime

    @property
    def signed_amount(self) -> Decimal:
        return self.amount if self.type == TransactionType.INCOME else -self.amount


@dataclass(frozen=True)
class Account:
    """Bank account. balance is maintained incrementally by transactions."""

    id: int
    name: str
    type: AccountType
    balance: Decimal
    currency: str = "USD"
    card_number: Optional[str] = None
    cvv: Optional[str] = None
    account_number: Optional[str] = None
    routing_number: Optional[str] = None


@dataclass(frozen=True)
class Budget:
    """Spending limit for a category. Spent is derived, never stored."""

    id: int
    category: str
    limit: Decimal


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    description: str
    due_date: datetime
    priority: TaskPriority
    completed: bool = False


@dataclass(frozen=True)
class Notification:
    id: int
    title: str
    description: str
    timestamp: datetime
    read: bool = False
    icon: Optional[str] = None
    icon_color: Optional[str] = None


@dataclass(frozen=True)
class Conversation:
    """Chat thread with one contact on one platform.

    Contact name, avatar and email are denormalized copies taken when the
    conversation starts; contact_id keeps the link to the administrator.
    """

    id: int
    contact_id: Optional[int]
    contact_name: str
    avatar_url: str
    last_message: str
    timestamp: datetime
    unread_count: int
    platform: MessagePlatform
    status: ContactStatus
    email: str
    phone: str


@dataclass(frozen=True)
class Message:
    id: int
    conversation_id: int
    text: str
    timestamp: datetime
    sender: MessageSender
    platform: MessagePlatform


@dataclass(frozen=True)
class ApiKey:
    id: str
    name: str
    key: str
    status: ApiKeyStatus
    scopes: frozenset[str]
    created_at: datetime
    last_used: Optional[datetime] = None


@dataclass(frozen=True)
class DnsRecord:
    type: str
    host: str
    value: str
    ttl: int


@dataclass(frozen=True)
class CustomDomain:
    id: int
    domain_name: str
    status: DomainStatus
    dns_records: tuple[DnsRecord, ...]


@dataclass(frozen=True)
class RecurringTransaction:
    id: int
    description: str
    amount: Decimal
    type: TransactionType
    category: str
    frequency: RecurrenceFrequency
    next_due_date: datetime


@dataclass(frozen=True)
class BudgetProgress:
    budget: Budget
    spent: Decimal

    @property
    def percentage(self) -> float:
        if self.budget.limit <= 0:
            return 0.0
        return float(self.spent / self.budget.limit * 100)

    @property
    def over_budget(self) -> bool:
        return self.percentage > 100


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: Decimal
    percentage: float


@dataclass(frozen=True)
class MonthlyTotals:
    month: str
    income: Decimal
    expense: Decimal


@dataclass(frozen=True)
class FinancialSummary:
    total_balance: Decimal
    income_30d: Decimal
    expense_30d: Decimal

    @property
    def net_30d(self) -> Decimal:
        return self.income_30d - self.expense_30d

    @property
    def income_share(self) -> float:
        """Percentage of income in income + expense; 50 when both are zero."""
        total = self.income_30d + self.expense_30d
        if total == 0:
            return 50.0
        return float(self.income_30d / total * 100)


@dataclass(frozen=True)
class DashboardSummary:
    financial: FinancialSummary
    active_projects: int
    tasks_due_today: int
    apps_in_error: int
    unread_notifications: int
    app_status_counts: Mapping[AppStatus, int]
    upcoming_tasks: tuple[Task, ...]

    @property
    def notification_count(self) -> int:
        return self.tasks_due_today + self.apps_in_error + self.unread_notifications


@dataclass(frozen=True)
class SearchResults:
    apps: tuple[ManagedApp, ...] = ()
    administrators: tuple[Administrator, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    tasks: tuple[Task, ...] = ()
    notifications: tuple[Notification, ...] = ()

    def is_empty(self) -> bool:
        return not (
            self.apps or self.administrators or self.transactions or self.tasks or self.notifications
        )
