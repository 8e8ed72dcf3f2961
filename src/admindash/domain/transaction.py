"""Transaction domain service."""

import random
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Callable, Optional

from admindash.domain.entities import Transaction, TransactionType
from admindash.domain.errors import NotFoundError, ValidationError, account_not_found
from admindash.utils.amount_parser import quantize_amount
from admindash.utils.ids import timestamp_id
from admindash.utils.timestamps import as_utc, truncate_to_millis, utc_now

if TYPE_CHECKING:
    from admindash.storage.entity_store import EntityStore


class TransactionService:
    """Service for recording transactions and keeping balances in step."""

    def __init__(
        self,
        store: "EntityStore",
        clock: Callable[[], datetime] = utc_now,
        rng: Optional[random.Random] = None,
    ):
        """Initialize transaction service.

        Args:
            store: Entity store
            clock: Source of the current time
            rng: Random generator used for id tiebreaks
        """
        self.store = store
        self.clock = clock
        self.rng = rng or random.Random()

    def add_transaction(
        self,
        description: str,
        amount: Decimal,
        type: TransactionType,
        category: str,
        account_id: int,
        date: Optional[datetime] = None,
    ) -> Transaction:
        """Record a transaction and apply it to its account balance.

        The transaction list stays sorted newest first; the new transaction
        goes ahead of any existing one with the same date. Budgets need no
        update because spent is derived from transactions on read.

        Args:
            description: Free-text description
            amount: Positive amount; the type decides the sign
            type: Income or expense
            category: Category name
            account_id: Account the money moves in or out of
            date: Transaction date (defaults to now); naive values are read as UTC

        Returns:
            The created transaction

        Raises:
            ValidationError: If amount is not positive or category is blank
            NotFoundError: If the account does not exist
        """
        amount = quantize_amount(amount)
        if amount <= 0:
            raise ValidationError(f"Transaction amount must be positive, got {amount}")
        if not category.strip():
            raise ValidationError("Transaction category is required")
        if not any(a.id == account_id for a in self.store.accounts):
            raise NotFoundError(account_not_found(account_id))

        now = self.clock()
        transaction = Transaction(
            id=timestamp_id(now, self.rng),
            description=description,
            amount=amount,
            type=TransactionType(type),
            category=category,
            account_id=account_id,
            date=truncate_to_millis(as_utc(date)) if date is not None else now,
        )

        self.store.transactions = tuple(
            sorted((transaction,) + self.store.transactions, key=lambda t: t.date, reverse=True)
        )
        self.store.accounts = tuple(
            replace(a, balance=a.balance + transaction.signed_amount) if a.id == account_id else a
            for a in self.store.accounts
        )
        return transaction

    def list_transactions(
        self,
        type: Optional[TransactionType] = None,
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List transactions, newest first, with optional filters.

        Args:
            type: Only income or only expense
            category: Exact category name
            account_id: Account ID
            start_date: Inclusive lower bound
            end_date: Inclusive upper bound
        """
        if start_date is not None:
            start_date = as_utc(start_date)
        if end_date is not None:
            end_date = as_utc(end_date)

        results = []
        for txn in self.store.transactions:
            if type is not None and txn.type != type:
                continue
            if category is not None and txn.category != category:
                continue
            if account_id is not None and txn.account_id != account_id:
                continue
            if start_date is not None and txn.date < start_date:
                continue
            if end_date is not None and txn.date > end_date:
                continue
            results.append(txn)
        return results
