"""Global search command."""

import click


@click.command("search")
@click.argument("query")
@click.pass_context
def search(ctx, query: str):
    """Search apps, administrators, transactions, tasks and notifications."""
    results = ctx.obj["workspace"].search(query)
    if results.is_empty():
        click.echo(f"No results for '{query}'.")
        return

    sections = (
        ("Apps", [f"{a.name} ({a.status.value})" for a in results.apps]),
        ("Administrators", [f"{a.name} <{a.email}>" for a in results.administrators]),
        ("Transactions", [f"{t.description}: {t.signed_amount:,.2f}" for t in results.transactions]),
        ("Tasks", [f"{t.title} (due {t.due_date:%Y-%m-%d})" for t in results.tasks]),
        ("Notifications", [f"{n.title}: {n.description}" for n in results.notifications]),
    )
    for title, lines in sections:
        if not lines:
            continue
        click.echo(f"\n{title}:")
        for line in lines:
            click.echo(f"  {line}")


def register_commands(cli):
    """Register search command with main CLI."""
    cli.add_command(search)
