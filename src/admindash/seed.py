"""Default collections used when nothing has been persisted yet."""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Optional

from admindash.domain.entities import (
    Account,
    AccountType,
    ActivityLog,
    Administrator,
    AdministratorRole,
    AdministratorStatus,
    ApiKey,
    ApiKeyStatus,
    AppPlatform,
    AppResources,
    AppStatus,
    Budget,
    ContactStatus,
    Conversation,
    CustomDomain,
    Deployment,
    DeploymentStatus,
    DnsRecord,
    DomainStatus,
    LogEntry,
    LogLevel,
    ManagedApp,
    Message,
    MessagePlatform,
    MessageSender,
    Notification,
    RecurrenceFrequency,
    RecurringTransaction,
    StorageUsage,
    Task,
    TaskPriority,
    Transaction,
    TransactionType,
)
from admindash.utils.timestamps import from_iso, truncate_to_millis, utc_now


def _administrators(now: datetime) -> tuple[Administrator, ...]:
    return (
        Administrator(
            id=1,
            name="SAIFUL ALAM RAFI",
            email="saiful@example.com",
            role=AdministratorRole.SYSTEM_ADMINISTRATOR,
            status=AdministratorStatus.ACTIVE,
            avatar_url="https://picsum.photos/id/237/100/100",
            last_login=from_iso("2023-10-26T10:00:00.000Z"),
            two_factor_enabled=True,
            permissions=frozenset({"sudo_access", "manage_users", "view_reports", "deploy_apps"}),
            activity_logs=(
                ActivityLog(1, now, "Logged In", "User logged in successfully", "192.168.1.1"),
                ActivityLog(
                    2, now - timedelta(hours=1), "Updated Settings", "Changed theme to Dark", "192.168.1.1"
                ),
            ),
            storage_usage=StorageUsage(used=7.8, total=25.0),
        ),
        Administrator(
            id=2,
            name="Jane Doe",
            email="jane@example.com",
            role=AdministratorRole.MANAGER,
            status=AdministratorStatus.ACTIVE,
            avatar_url="https://i.pravatar.cc/150?u=jane",
            last_login=now,
            two_factor_enabled=False,
            permissions=frozenset({"view_reports"}),
            activity_logs=(),
            storage_usage=StorageUsage(used=5.0, total=25.0),
        ),
        Administrator(
            id=3,
            name="John Smith",
            email="john@example.com",
            role=AdministratorRole.SUPPORT_STAFF,
            status=AdministratorStatus.INACTIVE,
            avatar_url="https://i.pravatar.cc/150?u=john",
            last_login=now - timedelta(days=5),
            two_factor_enabled=True,
            permissions=frozenset(),
            activity_logs=(),
            storage_usage=StorageUsage(used=2.0, total=25.0),
        ),
    )


def _apps(now: datetime) -> tuple[ManagedApp, ...]:
    return (
        ManagedApp(
            id=1,
            name="Main Web App",
            platform=AppPlatform.WEB_APP,
            repository="github.com/sar-international/webapp",
            status=AppStatus.RUNNING,
            last_deployed=from_iso("2023-10-25T14:30:00.000Z"),
            resources=AppResources(
                cpu=(10, 12, 15, 14, 20, 18, 25, 22, 20, 18, 24, 26),
                memory=(45, 48, 50, 55, 52, 58, 60, 58, 55, 62, 65, 63),
                storage=StorageUsage(used=15.2, total=50.0),
            ),
            environment_variables={"NODE_ENV": "production", "DB_HOST": "db.example.com"},
            deployments=(
                Deployment(1, "v2.1.0", from_iso("2023-10-25T14:30:00.000Z"), DeploymentStatus.SUCCESS),
                Deployment(2, "v2.0.1", from_iso("2023-10-22T11:00:00.000Z"), DeploymentStatus.SUCCESS),
            ),
            logs=(
                LogEntry(1, now, LogLevel.INFO, "Server started on port 80"),
                LogEntry(2, now - timedelta(seconds=10), LogLevel.WARN, "High memory usage detected"),
            ),
        ),
        ManagedApp(
            id=2,
            name="Auth API",
            platform=AppPlatform.API_SERVICE,
            repository="github.com/sar-international/auth-api",
            status=AppStatus.RUNNING,
            last_deployed=from_iso("2023-10-24T10:00:00.000Z"),
            resources=AppResources(
                cpu=(5, 6, 8, 7, 9, 8, 10, 11, 9, 8, 10, 12),
                memory=(20, 22, 25, 24, 28, 26, 30, 29, 27, 32, 35, 33),
                storage=StorageUsage(used=5.1, total=20.0),
            ),
            environment_variables={"NODE_ENV": "production", "JWT_SECRET": "********"},
            deployments=(
                Deployment(1, "v1.5.2", from_iso("2023-10-24T10:00:00.000Z"), DeploymentStatus.SUCCESS),
            ),
        ),
        ManagedApp(
            id=3,
            name="Analytics DB",
            platform=AppPlatform.DATABASE,
            repository="internal",
            status=AppStatus.ERROR,
            last_deployed=from_iso("2023-10-20T18:00:00.000Z"),
            resources=AppResources(
                cpu=(2, 3, 2, 4, 3, 5, 4, 3, 2, 4, 5, 4),
                memory=(70, 72, 75, 74, 78, 76, 80, 79, 77, 82, 85, 83),
                storage=StorageUsage(used=35.8, total=100.0),
            ),
            logs=(LogEntry(1, now, LogLevel.ERROR, "Failed to connect to primary cluster"),),
        ),
        ManagedApp(
            id=4,
            name="Mobile Gateway",
            platform=AppPlatform.API_SERVICE,
            repository="github.com/sar-international/mobile-gateway",
            status=AppStatus.STOPPED,
            last_deployed=from_iso("2023-09-15T12:00:00.000Z"),
            resources=AppResources(
                cpu=(0, 0, 0, 0),
                memory=(0, 0, 0, 0),
                storage=StorageUsage(used=0.5, total=10.0),
            ),
        ),
    )


def _accounts() -> tuple[Account, ...]:
    return (
        Account(
            id=1,
            name="Checking Account",
            type=AccountType.CHECKING,
            balance=Decimal("5230.50"),
            account_number="****1234",
            routing_number="021000021",
        ),
        Account(
            id=2,
            name="Savings Account",
            type=AccountType.SAVINGS,
            balance=Decimal("12800.75"),
            account_number="****5678",
            routing_number="021000021",
        ),
        Account(
            id=3,
            name="Visa Platinum",
            type=AccountType.CREDIT_CARD,
            balance=Decimal("-1250.00"),
            card_number="**** **** **** 4321",
            cvv="***",
        ),
    )


def _transactions(now: datetime) -> tuple[Transaction, ...]:
    salary_day = now.replace(day=2) if now.day >= 2 else now
    transactions = (
        Transaction(1, "Monthly Salary", Decimal("4500.00"), TransactionType.INCOME, "Salary", 1, salary_day),
        Transaction(
            2, "Grocery Shopping", Decimal("125.40"), TransactionType.EXPENSE, "Groceries", 1,
            now - timedelta(days=3),
        ),
        Transaction(
            3, "Electricity Bill", Decimal("75.20"), TransactionType.EXPENSE, "Utilities", 1,
            now - timedelta(days=5),
        ),
        Transaction(
            4, "Freelance Project", Decimal("750.00"), TransactionType.INCOME, "Freelance", 1,
            now - timedelta(days=10),
        ),
        Transaction(
            5, "Dinner Out", Decimal("55.00"), TransactionType.EXPENSE, "Entertainment", 1,
            now - timedelta(days=1),
        ),
    )
    return tuple(sorted(transactions, key=lambda t: t.date, reverse=True))


def _tasks(now: datetime) -> tuple[Task, ...]:
    return (
        Task(1, "Finalize Q4 Report", "Review and finalize the quarterly financial report.",
             now + timedelta(days=7), TaskPriority.HIGH),
        Task(2, "Team Standup", "Daily team sync-up meeting.", now, TaskPriority.MEDIUM, completed=True),
        Task(3, "Deploy new feature", "Deploy the new user authentication feature to production.",
             now + timedelta(days=2), TaskPriority.HIGH),
        Task(4, "Client Follow-up", "Call back client from Acme Corp.",
             now + timedelta(days=5), TaskPriority.MEDIUM),
        Task(5, "Update Dependencies", "Update all project dependencies to latest versions.",
             now + timedelta(days=10), TaskPriority.LOW),
    )


def _notifications(now: datetime) -> tuple[Notification, ...]:
    return (
        Notification(
            1, "Deployment Successful", 'Main Web App "v2.1.0" is live.',
            now - timedelta(minutes=15), read=False, icon="rocket", icon_color="text-green-400",
        ),
        Notification(
            2, "High Memory Usage", "Analytics DB memory usage above 80%.",
            now - timedelta(hours=2), read=True, icon="exclamation-triangle", icon_color="text-yellow-400",
        ),
    )


def _conversations(now: datetime) -> tuple[Conversation, ...]:
    return (
        Conversation(
            id=1,
            contact_id=2,
            contact_name="Jane Doe",
            avatar_url="https://i.pravatar.cc/150?u=jane",
            last_message="Hey, are we still on for the meeting tomorrow?",
            timestamp=now - timedelta(minutes=5),
            unread_count=2,
            platform=MessagePlatform.DEFAULT,
            status=ContactStatus.ONLINE,
            email="jane@example.com",
            phone="+1-202-555-0143",
        ),
        Conversation(
            id=2,
            contact_id=3,
            contact_name="John Smith",
            avatar_url="https://i.pravatar.cc/150?u=john",
            last_message="Sounds good, I will check it out.",
            timestamp=now - timedelta(hours=1),
            unread_count=0,
            platform=MessagePlatform.DEFAULT,
            status=ContactStatus.OFFLINE,
            email="john@example.com",
            phone="+1-202-555-0178",
        ),
    )


def _messages(now: datetime) -> tuple[Message, ...]:
    script = (
        (1, "Hey, how is the project going?", MessageSender.CONTACT, 17),
        (1, "Pretty good! I am almost done with the dashboard component.", MessageSender.ME, 16),
        (1, "Great to hear! Let me know if you need any help.", MessageSender.CONTACT, 15),
        (1, "Will do. Thanks!", MessageSender.ME, 14),
        (1, "Hey, are we still on for the meeting tomorrow?", MessageSender.CONTACT, 5),
        (2, "Sounds good, I will check it out.", MessageSender.CONTACT, 60),
    )
    return tuple(
        Message(
            id=index,
            conversation_id=conversation_id,
            text=text,
            timestamp=now - timedelta(minutes=minutes_ago),
            sender=sender,
            platform=MessagePlatform.DEFAULT,
        )
        for index, (conversation_id, text, sender, minutes_ago) in enumerate(script, start=1)
    )


def _api_keys(now: datetime) -> tuple[ApiKey, ...]:
    return (
        ApiKey(
            id="key-1",
            name="Production Integration",
            key="sark_live_****************************a1b2",
            status=ApiKeyStatus.ACTIVE,
            scopes=frozenset({"view_reports", "api_access"}),
            created_at=now - timedelta(days=30),
            last_used=now - timedelta(days=1),
        ),
    )


def _custom_domains() -> tuple[CustomDomain, ...]:
    return (
        CustomDomain(
            id=1,
            domain_name="dashboard.sar-international.com",
            status=DomainStatus.VERIFIED,
            dns_records=(
                DnsRecord(type="CNAME", host="dashboard", value="sar-dashboard.hosting.net", ttl=3600),
            ),
        ),
    )


def _budgets() -> tuple[Budget, ...]:
    return (
        Budget(1, "Groceries", Decimal("400.00")),
        Budget(2, "Utilities", Decimal("150.00")),
        Budget(3, "Entertainment", Decimal("200.00")),
    )


def _recurring_transactions(now: datetime) -> tuple[RecurringTransaction, ...]:
    return (
        RecurringTransaction(
            1, "Netflix Subscription", Decimal("15.99"), TransactionType.EXPENSE, "Entertainment",
            RecurrenceFrequency.MONTHLY, now + timedelta(days=12),
        ),
        RecurringTransaction(
            2, "Domain Renewal", Decimal("19.99"), TransactionType.EXPENSE, "Utilities",
            RecurrenceFrequency.YEARLY, now + timedelta(days=90),
        ),
    )


def build_seed_data(now: Optional[datetime] = None) -> dict[str, Any]:
    """Build the default value of every store collection.

    Relative dates are computed from now, truncated to milliseconds.

    Args:
        now: Reference time (defaults to the current UTC time)

    Returns:
        Mapping of collection name to its default value
    """
    now = truncate_to_millis(now) if now is not None else utc_now()
    administrators = _administrators(now)
    return {
        "administrators": administrators,
        "apps": _apps(now),
        "transactions": _transactions(now),
        "tasks": _tasks(now),
        "notifications": _notifications(now),
        "conversations": _conversations(now),
        "messages": _messages(now),
        "api_keys": _api_keys(now),
        "custom_domains": _custom_domains(),
        "accounts": _accounts(),
        "budgets": _budgets(),
        "recurring_transactions": _recurring_transactions(now),
        "current_user": administrators[0],
    }
