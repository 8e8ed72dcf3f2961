"""Shared pytest fixtures for admindash tests."""

import os
import random
import tempfile
from datetime import UTC, datetime, timedelta

import pytest

from admindash.scheduler import ManualScheduler
from admindash.seed import build_seed_data
from admindash.storage.entity_store import EntityStore
from admindash.storage.factories import create_sqlite_storage
from admindash.storage.memory import MemoryStorage
from admindash.workspace import Workspace

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Clock that moves forward one millisecond every time it is read."""

    def __init__(self, start: datetime = FIXED_NOW):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(milliseconds=1)
        return value

    def advance(self, **kwargs) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def temp_db_path():
    """Create a temporary database file path for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    yield db_path

    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def sqlite_storage(temp_db_path):
    """Create a SQLite storage backend in a temporary file."""
    storage = create_sqlite_storage(database_path=temp_db_path)
    storage.database_path = temp_db_path
    storage.connect()

    yield storage

    storage.disconnect()


@pytest.fixture
def memory_storage():
    """Create an in-memory storage backend."""
    return MemoryStorage()


@pytest.fixture
def scheduler():
    """Create a scheduler on a virtual clock starting at zero."""
    return ManualScheduler()


@pytest.fixture
def rng():
    """Create a seeded random generator."""
    return random.Random(1234)


@pytest.fixture
def clock():
    """Create a clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def seed_data():
    """Build the default collections relative to the fixed instant."""
    return build_seed_data(now=FIXED_NOW)


@pytest.fixture
def empty_store(memory_storage):
    """Create an entity store with no default data."""
    return EntityStore(memory_storage, defaults={})


@pytest.fixture
def store(memory_storage, seed_data):
    """Create an entity store loaded with the seed data."""
    return EntityStore(memory_storage, defaults=seed_data)


@pytest.fixture
def workspace(memory_storage, scheduler, rng, clock, seed_data):
    """Create a workspace over in-memory storage and a manual scheduler."""
    ws = Workspace(
        memory_storage,
        scheduler=scheduler,
        rng=rng,
        clock=clock,
        defaults=seed_data,
    )

    yield ws

    ws.shutdown()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
