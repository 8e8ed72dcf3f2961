"""Tests for upgrading legacy stored documents."""

import json
from decimal import Decimal

import pytest

from admindash.storage.entity_store import EntityStore
from admindash.storage.migrations import migrate_legacy_documents

LEGACY_ACCOUNTS = [
    {"id": 1, "name": "Checking Account", "balance": 100.5},
    {"id": 2, "name": "Savings Account", "type": "Savings", "balance": 50},
]

LEGACY_TRANSACTIONS = [
    {
        "id": 1,
        "description": "Coffee",
        "amount": 3.5,
        "type": "expense",
        "category": "Food",
        "account": "Checking Account",
        "date": "2024-06-01T09:00:00.000Z",
    },
    {
        "id": 2,
        "description": "Mystery",
        "amount": 9,
        "type": "income",
        "category": "Other",
        "account": "Closed Account",
        "date": "2024-06-02T09:00:00.000Z",
    },
    {
        "id": 3,
        "description": "Already migrated",
        "amount": 1,
        "type": "income",
        "category": "Other",
        "accountId": 2,
        "date": "2024-06-03T09:00:00.000Z",
    },
]

LEGACY_BUDGETS = [
    {"id": 1, "category": "Food", "limit": 200, "spent": 3.5},
    {"id": 2, "category": "Travel", "limit": 100},
]


@pytest.fixture
def legacy_storage(memory_storage):
    memory_storage.set_item("accounts", json.dumps(LEGACY_ACCOUNTS))
    memory_storage.set_item("transactions", json.dumps(LEGACY_TRANSACTIONS))
    memory_storage.set_item("budgets", json.dumps(LEGACY_BUDGETS))
    return memory_storage


def test_migration_rewrites_legacy_documents(legacy_storage):
    report = migrate_legacy_documents(legacy_storage)

    assert report.changed
    assert report.transactions_relinked == 1
    assert report.budgets_cleaned == 1
    assert report.accounts_typed == 1
    assert report.unresolved_accounts == {"Closed Account"}

    transactions = json.loads(legacy_storage.get_item("transactions"))
    assert transactions[0]["accountId"] == 1
    assert "account" not in transactions[0]
    assert transactions[1]["account"] == "Closed Account"
    assert all("spent" not in b for b in json.loads(legacy_storage.get_item("budgets")))
    assert json.loads(legacy_storage.get_item("accounts"))[0]["type"] == "Checking"


def test_dry_run_writes_nothing(legacy_storage):
    before = {key: legacy_storage.get_item(key) for key in legacy_storage.keys()}

    report = migrate_legacy_documents(legacy_storage, dry_run=True)

    assert report.transactions_relinked == 1
    assert {key: legacy_storage.get_item(key) for key in legacy_storage.keys()} == before


def test_second_run_is_a_no_op(legacy_storage):
    migrate_legacy_documents(legacy_storage)

    report = migrate_legacy_documents(legacy_storage)

    assert not report.changed


def test_empty_storage(memory_storage):
    report = migrate_legacy_documents(memory_storage)

    assert not report.changed
    assert memory_storage.keys() == []


def test_non_list_collection_rejected(memory_storage):
    memory_storage.set_item("budgets", json.dumps({"id": 1}))

    with pytest.raises(ValueError, match="budgets"):
        migrate_legacy_documents(memory_storage)


def test_migrated_budgets_load(legacy_storage):
    migrate_legacy_documents(legacy_storage)

    store = EntityStore(legacy_storage, defaults={})

    assert [(b.category, b.limit) for b in store.budgets] == [
        ("Food", Decimal("200.00")),
        ("Travel", Decimal("100.00")),
    ]
    assert store.accounts[0].balance == Decimal("100.50")
