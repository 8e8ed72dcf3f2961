"""Tests for the workspace object graph and data reset."""

from decimal import Decimal

from admindash.domain.entities import MessagePlatform, TransactionType
from admindash.storage.entity_store import EntityStore
from admindash.workspace import Workspace, create_workspace


def test_changes_persist_across_workspaces(sqlite_storage, seed_data, scheduler):
    first = Workspace(sqlite_storage, scheduler=scheduler, defaults=seed_data)
    first.tasks.toggle_task(1)
    first.transactions.add_transaction(
        "Lunch", Decimal("12.50"), TransactionType.EXPENSE, "Food", account_id=1
    )

    second = EntityStore(sqlite_storage, defaults=seed_data)

    assert next(t for t in second.tasks if t.id == 1).completed is True
    assert second.transactions[0].description == "Lunch"
    assert second.accounts[0].balance == Decimal("5218.00")


def test_reset_restores_defaults_after_delay(workspace, scheduler, seed_data):
    workspace.tasks.toggle_task(1)
    workspace.messaging.change_platform(MessagePlatform.WHATSAPP)

    workspace.reset_all_data()

    assert workspace.store.is_loading
    assert workspace.tasks.get_task(1).completed is True

    scheduler.advance(1.0)

    assert not workspace.store.is_loading
    assert workspace.store.tasks == seed_data["tasks"]
    assert workspace.store.active_platform == MessagePlatform.DEFAULT
    assert workspace.store.current_user == seed_data["current_user"]
    assert workspace.storage.keys() == []


def test_reset_cancels_pending_work_but_keeps_generator(workspace, scheduler):
    workspace.start()
    interval = workspace.generator.interval_task
    workspace.messaging.send_message("Hello?", 1)
    workspace.domains.verify_domain(1)

    workspace.reset_all_data()
    scheduler.advance(1.0)

    assert scheduler.pending() == [interval]
    assert workspace.generator.running
    assert not workspace.messaging.is_typing(1)


def test_dashboard_and_search(workspace):
    dashboard = workspace.dashboard()
    results = workspace.search("analytics")

    assert dashboard.active_projects == 4
    assert [a.name for a in results.apps] == ["Analytics DB"]


def test_create_workspace_uses_sqlite_file(temp_db_path):
    workspace = create_workspace(database_path=temp_db_path)
    try:
        workspace.tasks.toggle_task(2)
    finally:
        workspace.shutdown()

    reopened = create_workspace(database_path=temp_db_path)
    try:
        assert reopened.tasks.get_task(2).completed is False
    finally:
        reopened.shutdown()


def test_shutdown_cancels_everything(workspace, scheduler):
    workspace.start()
    workspace.messaging.send_message("Bye", 1)

    workspace.shutdown()

    assert scheduler.pending() == []
