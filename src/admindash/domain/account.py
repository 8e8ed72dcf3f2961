"""Account domain service."""

from typing import TYPE_CHECKING, Optional

from admindash.domain.entities import Account
from admindash.domain.errors import (
    DependencyError,
    NotFoundError,
    account_delete_blocked,
    account_not_found,
)

if TYPE_CHECKING:
    from admindash.storage.entity_store import EntityStore


class AccountService:
    """Service for reading and removing accounts.

    Accounts come from the seed data; balances change only through
    TransactionService.
    """

    def __init__(self, store: "EntityStore"):
        """Initialize account service.

        Args:
            store: Entity store
        """
        self.store = store

    def list_accounts(self) -> list[Account]:
        return list(self.store.accounts)

    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        for account in self.store.accounts:
            if account.id == account_id:
                return account
        return None

    def get_account_by_name(self, name: str) -> Optional[Account]:
        for account in self.store.accounts:
            if account.name == name:
                return account
        return None

    def require_account(self, account_id: int) -> Account:
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def transaction_count(self, account_id: int) -> int:
        return sum(1 for t in self.store.transactions if t.account_id == account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            NotFoundError: If account not found
            DependencyError: If transactions still reference the account
        """
        self.require_account(account_id)

        transaction_count = self.transaction_count(account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.store.accounts = tuple(a for a in self.store.accounts if a.id != account_id)
