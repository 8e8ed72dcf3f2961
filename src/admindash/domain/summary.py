"""Derived views over entity snapshots.

Everything here is a pure function of the collections passed in; nothing
is cached and nothing is written back to the store.
"""

from collections import Counter
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from admindash.domain.entities import (
    Account,
    Administrator,
    AppStatus,
    Budget,
    BudgetProgress,
    CategoryShare,
    DashboardSummary,
    FinancialSummary,
    ManagedApp,
    MonthlyTotals,
    Notification,
    SearchResults,
    Task,
    Transaction,
    TransactionType,
)
from admindash.utils.date_parser import month_key, month_start
from admindash.utils.timestamps import utc_now

ZERO = Decimal("0.00")

DEFAULT_BUDGET_TEMPLATE: tuple[tuple[str, Decimal], ...] = (
    ("Groceries", Decimal("400.00")),
    ("Utilities", Decimal("150.00")),
    ("Entertainment", Decimal("200.00")),
)

SEARCH_LIMITS = {
    "apps": 3,
    "administrators": 3,
    "transactions": 3,
    "tasks": 2,
    "notifications": 3,
}

UPCOMING_TASK_LIMIT = 4
RECENT_WINDOW_DAYS = 30


def _total(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def _expenses(transactions: Iterable[Transaction]) -> list[Transaction]:
    return [t for t in transactions if t.type == TransactionType.EXPENSE]


def budgets_from_template(
    transactions: Sequence[Transaction],
    categories: Sequence[tuple[str, Decimal]] = DEFAULT_BUDGET_TEMPLATE,
    today: Optional[date] = None,
) -> list[BudgetProgress]:
    """Progress against fixed category limits for the current calendar month.

    Args:
        transactions: Transactions to consider
        categories: (category, limit) pairs
        today: Reference day (defaults to the current UTC day)

    Returns:
        One BudgetProgress per template entry, ids numbered from 1
    """
    today = today or utc_now().date()
    current_month = month_key(today)
    monthly = [t for t in _expenses(transactions) if month_key(t.date) == current_month]

    results = []
    for index, (category, limit) in enumerate(categories, start=1):
        spent = _total(t.amount for t in monthly if t.category == category)
        results.append(BudgetProgress(budget=Budget(id=index, category=category, limit=limit), spent=spent))
    return results


def spent_in_category(transactions: Iterable[Transaction], category: str) -> Decimal:
    """Sum of expense amounts recorded under category."""
    return _total(t.amount for t in _expenses(transactions) if t.category == category)


def budget_progress(
    budgets: Sequence[Budget], transactions: Sequence[Transaction]
) -> list[BudgetProgress]:
    """Spent per stored budget, from every expense in its category."""
    return [
        BudgetProgress(budget=budget, spent=spent_in_category(transactions, budget.category))
        for budget in budgets
    ]


def financial_summary(
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
) -> FinancialSummary:
    """Total balance plus income and expense over the last 30 days."""
    now = now or utc_now()
    cutoff = now - timedelta(days=RECENT_WINDOW_DAYS)
    recent = [t for t in transactions if t.date >= cutoff]
    return FinancialSummary(
        total_balance=_total(a.balance for a in accounts),
        income_30d=_total(t.amount for t in recent if t.type == TransactionType.INCOME),
        expense_30d=_total(t.amount for t in recent if t.type == TransactionType.EXPENSE),
    )


def dashboard_summary(
    apps: Sequence[ManagedApp],
    tasks: Sequence[Task],
    notifications: Sequence[Notification],
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    now: Optional[datetime] = None,
) -> DashboardSummary:
    """Headline numbers for the dashboard landing view.

    Args:
        apps: Managed apps
        tasks: All tasks
        notifications: All notifications
        accounts: All accounts
        transactions: All transactions
        now: Reference time (defaults to now)

    Returns:
        DashboardSummary
    """
    now = now or utc_now()
    today = now.date()

    open_tasks = [t for t in tasks if not t.completed]
    status_counts = Counter(app.status for app in apps)

    return DashboardSummary(
        financial=financial_summary(accounts, transactions, now=now),
        active_projects=len(apps),
        tasks_due_today=sum(1 for t in open_tasks if t.due_date.date() == today),
        apps_in_error=status_counts.get(AppStatus.ERROR, 0),
        unread_notifications=sum(1 for n in notifications if not n.read),
        app_status_counts={status: status_counts.get(status, 0) for status in AppStatus},
        upcoming_tasks=tuple(sorted(open_tasks, key=lambda t: t.due_date)[:UPCOMING_TASK_LIMIT]),
    )


def search(
    query: str,
    apps: Sequence[ManagedApp],
    administrators: Sequence[Administrator],
    transactions: Sequence[Transaction],
    tasks: Sequence[Task],
    notifications: Sequence[Notification],
) -> SearchResults:
    """Case-insensitive substring search across the main collections.

    Each group is capped (see SEARCH_LIMITS). A blank query matches nothing.
    """
    needle = query.strip().lower()
    if not needle:
        return SearchResults()

    def matches(*fields: str) -> bool:
        return any(needle in field.lower() for field in fields)

    return SearchResults(
        apps=tuple(a for a in apps if matches(a.name))[: SEARCH_LIMITS["apps"]],
        administrators=tuple(a for a in administrators if matches(a.name, a.email))[
            : SEARCH_LIMITS["administrators"]
        ],
        transactions=tuple(t for t in transactions if matches(t.description))[
            : SEARCH_LIMITS["transactions"]
        ],
        tasks=tuple(t for t in tasks if matches(t.title, t.description))[: SEARCH_LIMITS["tasks"]],
        notifications=tuple(n for n in notifications if matches(n.title, n.description))[
            : SEARCH_LIMITS["notifications"]
        ],
    )


def expense_category_distribution(expenses: Sequence[Transaction]) -> list[CategoryShare]:
    """Group expense amounts by category, largest first, with percentages."""
    by_category: dict[str, Decimal] = {}
    for txn in _expenses(expenses):
        by_category[txn.category] = by_category.get(txn.category, ZERO) + txn.amount

    total = _total(by_category.values())
    shares = [
        CategoryShare(
            category=category,
            amount=amount,
            percentage=float(amount / total * 100) if total else 0.0,
        )
        for category, amount in by_category.items()
    ]
    shares.sort(key=lambda s: s.amount, reverse=True)
    return shares


def monthly_income_expense(
    transactions: Sequence[Transaction],
    months: int = 6,
    today: Optional[date] = None,
) -> list[MonthlyTotals]:
    """Income and expense per calendar month for the last N months.

    Months without transactions are included with zero totals. Results
    are in ascending month order and end with the current month.
    """
    today = today or utc_now().date()
    keys = [month_key(month_start(today, back)) for back in range(months - 1, -1, -1)]
    income = dict.fromkeys(keys, ZERO)
    expense = dict.fromkeys(keys, ZERO)

    for txn in transactions:
        key = month_key(txn.date)
        if key not in income:
            continue
        if txn.type == TransactionType.INCOME:
            income[key] += txn.amount
        else:
            expense[key] += txn.amount

    return [MonthlyTotals(month=key, income=income[key], expense=expense[key]) for key in keys]
