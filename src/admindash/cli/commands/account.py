"""Account management commands."""

import click

from admindash.cli.account_resolution import resolve_account_or_exit
from admindash.cli.error_handling import handle_domain_error
from admindash.domain.errors import DomainError


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    service = ctx.obj["workspace"].accounts

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.type.value:12s} | "
            f"{acc.balance:>12,.2f} {acc.currency}"
        )


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def delete_account(ctx, account: str) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no transactions reference it.

    Examples:
        admindash account delete "Savings Account"
        admindash account delete 2
    """
    service = ctx.obj["workspace"].accounts
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    transaction_count = service.transaction_count(account_id)
    if transaction_count > 0:
        click.echo(
            f"Error: Cannot delete account '{account_obj.name}': it has "
            f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}.",
            err=True,
        )
        click.echo("Please reassign or delete them first.", err=True)
        ctx.exit(1)

    if not click.confirm(f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account '{account_obj.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
