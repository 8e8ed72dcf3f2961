"""Budget management commands."""

import click

from admindash.cli.error_handling import handle_domain_error
from admindash.domain.errors import DomainError
from admindash.utils.amount_parser import parse_amount


def _parse_limit(ctx, limit: str):
    try:
        return parse_amount(limit)
    except ValueError as e:
        click.echo(f"Error: Invalid limit: {e}", err=True)
        ctx.exit(1)


@click.group()
def budget_group():
    """Manage category budgets."""
    pass


@budget_group.command("list")
@click.pass_context
def list_budgets(ctx):
    """Show each budget with spending against its limit."""
    service = ctx.obj["workspace"].budgets

    progress = service.budget_progress()
    if not progress:
        click.echo("No budgets set.")
        return

    click.echo(f"\n{'ID':>3}  {'Category':<16} {'Spent':>10} {'Limit':>10} {'Used':>7}")
    click.echo("-" * 52)
    for item in progress:
        flag = "  OVER" if item.over_budget else ""
        click.echo(
            f"{item.budget.id:>3}  {item.budget.category:<16} {item.spent:>10,.2f} "
            f"{item.budget.limit:>10,.2f} {item.percentage:>6.1f}%{flag}"
        )


@budget_group.command("add")
@click.argument("category")
@click.argument("limit")
@click.pass_context
def add_budget(ctx, category: str, limit: str):
    """Create a budget for CATEGORY with spending LIMIT.

    Examples:
        admindash budget add Travel 300
    """
    service = ctx.obj["workspace"].budgets
    try:
        budget = service.add_budget(category, _parse_limit(ctx, limit))
        click.echo(f"Created budget '{budget.category}' (ID: {budget.id}) with limit {budget.limit:,.2f}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@budget_group.command("update")
@click.argument("budget_id", type=int)
@click.argument("category")
@click.argument("limit")
@click.pass_context
def update_budget(ctx, budget_id: int, category: str, limit: str):
    """Change the category and limit of a budget."""
    service = ctx.obj["workspace"].budgets
    try:
        budget = service.update_budget(budget_id, category, _parse_limit(ctx, limit))
        click.echo(f"Updated budget {budget.id}: '{budget.category}' limit {budget.limit:,.2f}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@budget_group.command("delete")
@click.argument("budget_id", type=int)
@click.pass_context
def delete_budget(ctx, budget_id: int):
    """Delete a budget."""
    service = ctx.obj["workspace"].budgets
    try:
        service.delete_budget(budget_id)
        click.echo(f"Deleted budget {budget_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
