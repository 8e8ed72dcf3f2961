"""Transaction management commands."""

import click

from admindash.cli.account_resolution import resolve_account_or_exit
from admindash.cli.error_handling import handle_domain_error
from admindash.domain.entities import TransactionType
from admindash.domain.errors import DomainError
from admindash.utils.amount_parser import parse_amount
from admindash.utils.date_parser import parse_datetime

TRANSACTION_TYPES = [t.value for t in TransactionType]


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--amount", required=True, help="Positive amount (e.g., 123.45)")
@click.option("--type", "txn_type", type=click.Choice(TRANSACTION_TYPES), required=True, help="Income or expense")
@click.option("--category", required=True, help="Category (e.g., Groceries)")
@click.option("--description", default="", help="Transaction description")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to now")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    amount: str,
    txn_type: str,
    category: str,
    description: str,
    date: str | None,
) -> None:
    """Record a transaction and update the account balance.

    Examples:
        admindash transaction add --account "Checking Account" --amount 42.10 --type expense --category Groceries
        admindash transaction add --account 2 --amount 100 --type income --category Other --date yesterday
    """
    workspace = ctx.obj["workspace"]
    account_id = resolve_account_or_exit(ctx, workspace.accounts, account)

    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_datetime(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        txn = workspace.transactions.add_transaction(
            description=description,
            amount=txn_amount,
            type=TransactionType(txn_type),
            category=category,
            account_id=account_id,
            date=txn_date,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    account_obj = workspace.accounts.get_account(account_id)
    click.echo(f"Recorded {txn.type.value} of {txn.amount:,.2f} (ID: {txn.id})")
    click.echo(f"New balance of '{account_obj.name}': {account_obj.balance:,.2f}")


@transaction_group.command("list")
@click.option("--type", "txn_type", type=click.Choice(TRANSACTION_TYPES), help="Only income or only expense")
@click.option("--category", help="Category name")
@click.option("--account", help="Account name or ID")
@click.option("--limit", type=int, default=None, help="Show at most this many transactions")
@click.pass_context
def list_transactions(ctx, txn_type: str | None, category: str | None, account: str | None, limit: int | None):
    """View transactions, newest first, with optional filters."""
    workspace = ctx.obj["workspace"]

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, workspace.accounts, account)

    transactions = workspace.transactions.list_transactions(
        type=TransactionType(txn_type) if txn_type else None,
        category=category,
        account_id=account_id,
    )
    if limit is not None:
        transactions = transactions[:limit]

    if not transactions:
        click.echo("No transactions found.")
        return

    account_names = {a.id: a.name for a in workspace.accounts.list_accounts()}
    click.echo(f"\n{'Date':<12} {'Description':<28} {'Category':<14} {'Account':<18} {'Amount':>12}")
    click.echo("-" * 88)
    for txn in transactions:
        click.echo(
            f"{txn.date.date().isoformat():<12} {txn.description[:28]:<28} {txn.category[:14]:<14} "
            f"{account_names.get(txn.account_id, '?')[:18]:<18} {txn.signed_amount:>12,.2f}"
        )


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
