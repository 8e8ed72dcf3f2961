"""Tests for JSON persistence of single values."""

import logging
from datetime import UTC, datetime
from decimal import Decimal

from admindash.storage import slot
from admindash.storage.memory import MemoryStorage


def test_save_and_load_revives_dates(memory_storage):
    """Dates come back as aware datetimes and decimals as their exact text."""
    value = {
        "when": datetime(2024, 6, 15, 12, 30, 45, 123000, tzinfo=UTC),
        "amount": Decimal("125.40"),
        "items": [{"at": datetime(2024, 1, 1, tzinfo=UTC)}],
    }

    assert slot.save(memory_storage, "doc", value) is True
    loaded = slot.load(memory_storage, "doc", None)

    assert loaded["when"] == value["when"]
    assert loaded["when"].tzinfo is not None
    assert loaded["amount"] == "125.40"
    assert loaded["items"][0]["at"] == datetime(2024, 1, 1, tzinfo=UTC)


def test_decimals_are_written_as_exact_text(memory_storage):
    slot.save(memory_storage, "big", Decimal("12345678901234567.89"))

    assert memory_storage.get_item("big") == '"12345678901234567.89"'


def test_legacy_numbers_load_as_decimals(memory_storage):
    memory_storage.set_item("doc", '{"amount": 125.40}')

    assert slot.load(memory_storage, "doc", None) == {"amount": Decimal("125.40")}


def test_dates_are_written_with_millisecond_z_suffix(memory_storage):
    """Stored timestamps use ISO-8601 with milliseconds and Z."""
    slot.save(memory_storage, "t", datetime(2024, 6, 15, 8, 5, 3, 7000, tzinfo=UTC))

    assert memory_storage.get_item("t") == '"2024-06-15T08:05:03.007Z"'


def test_strings_that_only_look_like_dates_are_kept():
    """Only the exact timestamp layout is revived."""
    revived = slot.revive_dates(["2024-06-15", "2024-06-15T08:05:03Z", "hello"])

    assert revived == ["2024-06-15", "2024-06-15T08:05:03Z", "hello"]


def test_top_level_timestamp_string_is_revived():
    assert slot.revive_dates("2024-06-15T08:05:03.000Z") == datetime(2024, 6, 15, 8, 5, 3, tzinfo=UTC)


def test_load_missing_key_returns_default(memory_storage):
    assert slot.load(memory_storage, "absent", [1, 2]) == [1, 2]


def test_load_corrupt_json_returns_default(memory_storage, caplog):
    """Unparseable stored text falls back to the default and is logged."""
    memory_storage.set_item("broken", "{not json")

    with caplog.at_level(logging.WARNING):
        assert slot.load(memory_storage, "broken", "fallback") == "fallback"

    assert "broken" in caplog.text


def test_load_decode_failure_returns_default(memory_storage):
    """A decoder raising KeyError counts as corrupt data."""
    memory_storage.set_item("doc", '{"unexpected": 1}')

    result = slot.load(memory_storage, "doc", "default", decode=lambda doc: doc["expected"])

    assert result == "default"


def test_load_from_disabled_storage_returns_default():
    storage = MemoryStorage()
    storage.available = False

    assert slot.load(storage, "anything", 42) == 42


def test_save_over_quota_returns_false_and_keeps_previous_value():
    """A quota failure is reported, not raised, and the old value survives."""
    storage = MemoryStorage(quota_bytes=20)
    assert slot.save(storage, "k", "short") is True

    assert slot.save(storage, "k", "x" * 100) is False
    assert storage.get_item("k") == '"short"'


def test_save_unserializable_value_returns_false(memory_storage):
    assert slot.save(memory_storage, "k", object()) is False
    assert memory_storage.get_item("k") is None


def test_bind_reads_existing_value(memory_storage):
    slot.save(memory_storage, "count", 3)

    handle = slot.bind(memory_storage, "count", 0)

    assert handle.get() == 3


def test_slot_set_accepts_updater_function(memory_storage):
    """set() with a callable applies it to the previous value and persists."""
    handle = slot.bind(memory_storage, "count", 0)

    handle.set(lambda previous: previous + 5)

    assert handle.get() == 5
    assert slot.load(memory_storage, "count", None) == 5


def test_slot_keeps_memory_value_when_save_fails():
    """The in-memory value is authoritative when the backend rejects a write."""
    storage = MemoryStorage()
    handle = slot.bind(storage, "names", [])
    storage.available = False

    handle.set(["alice"])

    assert handle.get() == ["alice"]

    storage.available = True
    handle.set(["alice", "bob"])
    assert slot.load(storage, "names", None) == ["alice", "bob"]


def test_slot_reload_falls_back_to_default(memory_storage):
    handle = slot.bind(memory_storage, "k", "default")
    handle.set("changed")
    memory_storage.clear()

    assert handle.reload() == "default"
