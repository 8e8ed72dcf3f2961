"""Tests for account, transaction and budget services."""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from admindash.domain import summary
from admindash.domain.account import AccountService
from admindash.domain.budget import BudgetService
from admindash.domain.entities import TransactionType
from admindash.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
)
from admindash.domain.transaction import TransactionService

from conftest import FIXED_NOW


@pytest.fixture
def account_service(store):
    return AccountService(store)


@pytest.fixture
def transaction_service(store, clock, rng):
    return TransactionService(store, clock=clock, rng=rng)


@pytest.fixture
def budget_service(store):
    return BudgetService(store)


class TestTransactions:
    """Tests for recording transactions."""

    def test_income_raises_balance(self, transaction_service, account_service):
        transaction_service.add_transaction(
            "Refund", Decimal("20.00"), TransactionType.INCOME, "Other", account_id=2
        )

        assert account_service.require_account(2).balance == Decimal("12820.75")

    def test_expense_lowers_balance(self, transaction_service, account_service):
        transaction_service.add_transaction(
            "Taxi", Decimal("12.345"), TransactionType.EXPENSE, "Travel", account_id=1
        )

        assert account_service.require_account(1).balance == Decimal("5218.15")

    def test_other_accounts_untouched(self, transaction_service, account_service):
        transaction_service.add_transaction(
            "Taxi", Decimal("10"), TransactionType.EXPENSE, "Travel", account_id=1
        )

        assert account_service.require_account(3).balance == Decimal("-1250.00")

    def test_unknown_account_rejected(self, transaction_service, store):
        before = store.transactions

        with pytest.raises(NotFoundError, match="Account 99 not found"):
            transaction_service.add_transaction(
                "Ghost", Decimal("1"), TransactionType.INCOME, "Other", account_id=99
            )

        assert store.transactions == before

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-5"), Decimal("0.001")])
    def test_non_positive_amount_rejected(self, transaction_service, amount):
        with pytest.raises(ValidationError):
            transaction_service.add_transaction(
                "Bad", amount, TransactionType.EXPENSE, "Other", account_id=1
            )

    def test_blank_category_rejected(self, transaction_service):
        with pytest.raises(ValidationError):
            transaction_service.add_transaction(
                "Bad", Decimal("1"), TransactionType.EXPENSE, " ", account_id=1
            )

    def test_list_stays_newest_first(self, transaction_service):
        """Backdated transactions are placed by date, not at the top."""
        backdated = transaction_service.add_transaction(
            "Old invoice", Decimal("5"), TransactionType.INCOME, "Freelance",
            account_id=1, date=FIXED_NOW - timedelta(days=4),
        )
        fresh = transaction_service.add_transaction(
            "Coffee", Decimal("3"), TransactionType.EXPENSE, "Food", account_id=1
        )

        transactions = transaction_service.list_transactions()
        dates = [t.date for t in transactions]
        assert dates == sorted(dates, reverse=True)
        assert transactions[0] == fresh
        assert backdated in transactions

    def test_same_date_goes_first(self, transaction_service):
        existing = transaction_service.list_transactions()[0]

        added = transaction_service.add_transaction(
            "Tie", Decimal("1"), TransactionType.INCOME, "Other", account_id=1, date=existing.date
        )

        assert transaction_service.list_transactions()[:2] == [added, existing]

    def test_naive_date_is_read_as_utc(self, transaction_service):
        added = transaction_service.add_transaction(
            "Old invoice", Decimal("5"), TransactionType.INCOME, "Freelance",
            account_id=1, date=datetime(2024, 1, 1, 9, 30),
        )

        assert added.date == datetime(2024, 1, 1, 9, 30, tzinfo=UTC)
        assert transaction_service.list_transactions()[-1] == added

    def test_naive_filter_bounds(self, transaction_service):
        naive_start = FIXED_NOW.replace(tzinfo=None) - timedelta(days=4)

        recent = transaction_service.list_transactions(start_date=naive_start)

        assert {t.description for t in recent} == {"Grocery Shopping", "Dinner Out"}

    def test_filters(self, transaction_service):
        expenses = transaction_service.list_transactions(type=TransactionType.EXPENSE)
        assert {t.category for t in expenses} == {"Groceries", "Utilities", "Entertainment"}

        groceries = transaction_service.list_transactions(category="Groceries")
        assert [t.description for t in groceries] == ["Grocery Shopping"]

        assert transaction_service.list_transactions(account_id=2) == []

        recent = transaction_service.list_transactions(start_date=FIXED_NOW - timedelta(days=4))
        assert {t.description for t in recent} == {"Grocery Shopping", "Dinner Out"}


class TestAccounts:
    """Tests for account lookup and deletion."""

    def test_lookup_by_name(self, account_service):
        assert account_service.get_account_by_name("Savings Account").id == 2
        assert account_service.get_account_by_name("Nope") is None

    def test_delete_account_with_transactions_blocked(self, account_service):
        with pytest.raises(DependencyError, match="5 transactions"):
            account_service.delete_account(1)

        assert account_service.get_account(1) is not None

    def test_delete_unused_account(self, account_service):
        account_service.delete_account(3)

        assert [a.id for a in account_service.list_accounts()] == [1, 2]

    def test_delete_unknown_account(self, account_service):
        with pytest.raises(NotFoundError):
            account_service.delete_account(9)


class TestBudgets:
    """Tests for budgets and derived spending."""

    def test_spent_is_derived_from_expenses(self, budget_service):
        progress = {p.budget.category: p for p in budget_service.budget_progress()}

        assert progress["Groceries"].spent == Decimal("125.40")
        assert progress["Utilities"].spent == Decimal("75.20")
        assert progress["Entertainment"].spent == Decimal("55.00")

    def test_expense_increases_spent(self, budget_service, transaction_service):
        transaction_service.add_transaction(
            "Market", Decimal("300"), TransactionType.EXPENSE, "Groceries", account_id=1
        )

        progress = {p.budget.category: p for p in budget_service.budget_progress()}
        assert progress["Groceries"].spent == Decimal("425.40")
        assert progress["Groceries"].over_budget

    def test_income_does_not_count(self, budget_service, transaction_service):
        transaction_service.add_transaction(
            "Cashback", Decimal("50"), TransactionType.INCOME, "Groceries", account_id=1
        )

        assert budget_service.spent_for("Groceries") == Decimal("125.40")

    def test_progress_matches_summary_view(self, budget_service, store):
        assert budget_service.budget_progress() == summary.budget_progress(
            store.budgets, store.transactions
        )

    def test_add_budget(self, budget_service):
        budget = budget_service.add_budget(" Travel ", Decimal("300"))

        assert budget.id == 4
        assert budget.category == "Travel"
        assert budget.limit == Decimal("300.00")
        assert budget_service.spent_for("Travel") == Decimal("0.00")

    def test_duplicate_category_conflicts(self, budget_service):
        with pytest.raises(ConflictError):
            budget_service.add_budget("Groceries", Decimal("10"))

    @pytest.mark.parametrize("category,limit", [("", Decimal("10")), ("Travel", Decimal("0"))])
    def test_invalid_budget(self, budget_service, category, limit):
        with pytest.raises(ValidationError):
            budget_service.add_budget(category, limit)

    def test_update_budget_keeps_own_category(self, budget_service):
        updated = budget_service.update_budget(1, "Groceries", Decimal("450"))

        assert updated.limit == Decimal("450.00")

    def test_update_budget_to_taken_category(self, budget_service):
        with pytest.raises(ConflictError):
            budget_service.update_budget(1, "Utilities", Decimal("450"))

    def test_delete_budget(self, budget_service):
        budget_service.delete_budget(2)

        assert budget_service.get_budget(2) is None
        with pytest.raises(NotFoundError):
            budget_service.delete_budget(2)
