"""Upgrades for documents written in older layouts.

Older data referenced a transaction's account by name ("account") and
stored a running "spent" on each budget. Current documents use
"accountId" and derive spent from transactions.
"""

import logging
from dataclasses import dataclass, field

from admindash.storage.base import StorageBackend
from admindash.storage.slot import dumps, loads

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_TYPE = "Checking"


@dataclass
class MigrationReport:
    transactions_relinked: int = 0
    budgets_cleaned: int = 0
    accounts_typed: int = 0
    unresolved_accounts: set[str] = field(default_factory=set)

    @property
    def changed(self) -> bool:
        return bool(self.transactions_relinked or self.budgets_cleaned or self.accounts_typed)


def _read(storage: StorageBackend, key: str) -> list:
    raw = storage.get_item(key)
    if raw is None:
        return []
    documents = loads(raw)
    if not isinstance(documents, list):
        raise ValueError(f"Stored value for '{key}' is not a list")
    return documents


def migrate_legacy_documents(storage: StorageBackend, dry_run: bool = False) -> MigrationReport:
    """Rewrite legacy account, transaction and budget documents in place.

    Transactions whose account name matches no account are left unchanged
    and reported in unresolved_accounts. Running the migration twice is a
    no-op.

    Args:
        storage: Backend to migrate
        dry_run: Report what would change without writing

    Returns:
        MigrationReport

    Raises:
        StorageError: If the backend cannot be read or written
        ValueError: If a stored collection is not a JSON list
    """
    report = MigrationReport()

    accounts = _read(storage, "accounts")
    for doc in accounts:
        if "type" not in doc:
            doc["type"] = DEFAULT_ACCOUNT_TYPE
            report.accounts_typed += 1
    account_ids = {doc["name"]: doc["id"] for doc in accounts}

    transactions = _read(storage, "transactions")
    for doc in transactions:
        if "accountId" in doc or "account" not in doc:
            continue
        account_id = account_ids.get(doc["account"])
        if account_id is None:
            report.unresolved_accounts.add(doc["account"])
            continue
        doc["accountId"] = account_id
        del doc["account"]
        report.transactions_relinked += 1

    budgets = _read(storage, "budgets")
    for doc in budgets:
        if "spent" in doc:
            del doc["spent"]
            report.budgets_cleaned += 1

    if report.unresolved_accounts:
        logger.warning(
            "Transactions reference unknown account(s): %s",
            ", ".join(sorted(report.unresolved_accounts)),
        )

    if not dry_run:
        if report.accounts_typed:
            storage.set_item("accounts", dumps(accounts))
        if report.transactions_relinked:
            storage.set_item("transactions", dumps(transactions))
        if report.budgets_cleaned:
            storage.set_item("budgets", dumps(budgets))
    return report
