"""Tests for entity/document mappers."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from admindash.domain.entities import (
    Account,
    AccountType,
    ApiKey,
    ApiKeyStatus,
    Budget,
    Transaction,
    TransactionType,
)
from admindash.storage import mappers
from admindash.storage.slot import dumps, loads


class TestMappers:
    """Tests for mapper functions."""

    def test_transaction_document_uses_camel_case_account_id(self):
        txn = Transaction(
            id=7,
            description="Coffee",
            amount=Decimal("3.50"),
            type=TransactionType.EXPENSE,
            category="Other",
            account_id=1,
            date=datetime(2024, 6, 1, tzinfo=UTC),
        )

        doc = mappers.transaction_to_document(txn)

        assert doc["accountId"] == 1
        assert doc["type"] == "expense"
        assert "account_id" not in doc

    def test_transaction_survives_json(self):
        """A transaction written and read through JSON is unchanged."""
        txn = Transaction(
            id=1718452800000123,
            description="Salary",
            amount=Decimal("4500.00"),
            type=TransactionType.INCOME,
            category="Salary",
            account_id=1,
            date=datetime(2024, 6, 2, 9, 30, tzinfo=UTC),
        )

        doc = loads(dumps(mappers.transaction_to_document(txn)))

        assert mappers.transaction_from_document(doc) == txn

    def test_large_amount_survives_json_exactly(self):
        account = Account(
            id=1, name="Treasury", type=AccountType.SAVINGS, balance=Decimal("98765432109876543.21")
        )

        doc = loads(dumps(mappers.account_to_document(account)))

        assert mappers.account_from_document(doc).balance == Decimal("98765432109876543.21")

    def test_non_numeric_amount_is_rejected(self):
        with pytest.raises(ValueError, match="Invalid money value"):
            mappers.budget_from_document({"id": 1, "category": "Food", "limit": "abc"})

    def test_unknown_scopes_are_dropped_on_load(self):
        doc = mappers.api_key_to_document(
            ApiKey(
                id="key-1",
                name="CI",
                key="sark_live_x",
                status=ApiKeyStatus.ACTIVE,
                scopes=frozenset({"api_access"}),
                created_at=datetime(2024, 1, 1, tzinfo=UTC),
            )
        )
        doc["scopes"].append("launch_rockets")

        assert mappers.api_key_from_document(doc).scopes == frozenset({"api_access"})

    def test_budget_document_has_no_spent(self):
        doc = mappers.budget_to_document(Budget(1, "Groceries", Decimal("400.00")))

        assert set(doc) == {"id", "category", "limit"}

    def test_legacy_budget_spent_is_ignored(self):
        budget = mappers.budget_from_document(
            {"id": 1, "category": "Groceries", "limit": 400, "spent": 125.4}
        )

        assert budget == Budget(1, "Groceries", Decimal("400"))

    def test_api_key_scopes_are_sorted_list(self):
        api_key = ApiKey(
            id="key-1",
            name="CI",
            key="sark_live_x",
            status=ApiKeyStatus.ACTIVE,
            scopes=frozenset({"view_reports", "api_access"}),
            created_at=datetime(2024, 1, 1, tzinfo=UTC),
        )

        doc = mappers.api_key_to_document(api_key)

        assert doc["scopes"] == ["api_access", "view_reports"]
        assert doc["lastUsed"] is None
        assert mappers.api_key_from_document(doc) == api_key

    def test_seed_administrators_round_trip(self, seed_data):
        for admin in seed_data["administrators"]:
            doc = loads(dumps(mappers.administrator_to_document(admin)))
            assert mappers.administrator_from_document(doc) == admin

    def test_seed_apps_round_trip(self, seed_data):
        for app in seed_data["apps"]:
            doc = loads(dumps(mappers.app_to_document(app)))
            assert mappers.app_from_document(doc) == app

    def test_collection_decoder_rejects_non_list(self):
        decode = mappers.collection_decoder(mappers.budget_from_document)

        with pytest.raises(TypeError):
            decode({"id": 1})

    def test_optional_decoder_passes_none_through(self):
        decode = mappers.optional_decoder(mappers.administrator_from_document)

        assert decode(None) is None
