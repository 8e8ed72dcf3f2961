"""Dashboard summary command."""

import click

from admindash.domain import summary as views


@click.command("summary")
@click.option("--months", type=int, default=6, show_default=True, help="Months of income/expense history")
@click.pass_context
def summary(ctx, months: int):
    """Show the dashboard overview."""
    workspace = ctx.obj["workspace"]
    store = workspace.store
    dashboard = workspace.dashboard()
    financial = dashboard.financial

    click.echo("\nOverview")
    click.echo("-" * 50)
    click.echo(f"Active projects:     {dashboard.active_projects}")
    click.echo(f"Tasks due today:     {dashboard.tasks_due_today}")
    click.echo(f"Apps in error:       {dashboard.apps_in_error}")
    click.echo(f"Unread notices:      {dashboard.unread_notifications}")
    click.echo(f"Notification badge:  {dashboard.notification_count}")
    statuses = ", ".join(f"{status.value} {count}" for status, count in dashboard.app_status_counts.items())
    click.echo(f"App status:          {statuses}")

    click.echo("\nFinances (last 30 days)")
    click.echo("-" * 50)
    click.echo(f"Total balance:       {financial.total_balance:>12,.2f}")
    click.echo(f"Income:              {financial.income_30d:>12,.2f}")
    click.echo(f"Expenses:            {financial.expense_30d:>12,.2f}")
    click.echo(f"Net:                 {financial.net_30d:>12,.2f}")
    click.echo(f"Income share:        {financial.income_share:>11.1f}%")

    distribution = views.expense_category_distribution(store.transactions)
    if distribution:
        click.echo("\nExpenses by category")
        click.echo("-" * 50)
        for share in distribution:
            click.echo(f"{share.category:<20} {share.amount:>12,.2f} {share.percentage:>6.1f}%")

    click.echo("\nMonthly income / expense")
    click.echo("-" * 50)
    for totals in views.monthly_income_expense(store.transactions, months=months):
        click.echo(f"{totals.month}  {totals.income:>12,.2f}  {totals.expense:>12,.2f}")

    if dashboard.upcoming_tasks:
        click.echo("\nUpcoming tasks")
        click.echo("-" * 50)
        for task in dashboard.upcoming_tasks:
            click.echo(f"{task.due_date:%Y-%m-%d}  {task.priority.value:6s}  {task.title}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
