#!/usr/bin/env python3
"""Migration script to upgrade legacy stored documents.

This migration rewrites documents saved in the older layout:
- transactions: "account" (account name) becomes "accountId"
- budgets: the stored "spent" field is dropped (spent is derived now)
- accounts: a missing "type" is set to "Checking"

Transactions naming an account that no longer exists are left unchanged
and reported.

Usage:
    python migrations/migrate_legacy_documents.py [--db-path PATH] [--dry-run]
"""

import sys
from pathlib import Path

# Add src to path so we can import admindash modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from admindash.storage.factories import create_sqlite_storage
from admindash.storage.migrations import migrate_legacy_documents


def migrate_database(database_path: str | None = None, dry_run: bool = False) -> None:
    """Upgrade legacy documents in the database.

    Args:
        database_path: Path to database file. If None, uses default location.
        dry_run: Only report what would change

    Raises:
        StorageError: If the database cannot be read or written
    """
    storage = create_sqlite_storage(database_path=database_path)
    storage.connect()

    try:
        print("Starting migration: upgrading legacy documents...")
        report = migrate_legacy_documents(storage, dry_run=dry_run)

        if not report.changed:
            print("Migration already applied: no legacy documents found")
            return

        print(f"  Relinked {report.transactions_relinked} transaction(s) to account ids")
        print(f"  Removed stored spent from {report.budgets_cleaned} budget(s)")
        print(f"  Set a type on {report.accounts_typed} account(s)")
        for name in sorted(report.unresolved_accounts):
            print(f"  Warning: no account named '{name}'; its transactions were left as they are")

        if dry_run:
            print("Dry run: nothing was written")
        else:
            print("Migration completed successfully!")
    finally:
        storage.disconnect()


def main():
    """Main entry point for migration script."""
    import argparse

    parser = argparse.ArgumentParser(description="Upgrade legacy admindash documents")
    parser.add_argument(
        "--db-path",
        type=str,
        help="Path to database file (overrides ADMINDASH_DB_PATH environment variable)",
    )
    parser.add_argument("--dry-run", action="store_true", help="Report changes without writing")
    args = parser.parse_args()

    try:
        migrate_database(database_path=args.db_path, dry_run=args.dry_run)
        return 0
    except Exception as e:
        print(f"\nMigration failed: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
