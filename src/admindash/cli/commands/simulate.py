"""Realtime simulation command."""

import random

import click


@click.command("simulate")
@click.option("--ticks", type=click.IntRange(min=1), default=10, show_default=True, help="Number of ticks to run")
@click.option("--seed", type=int, help="Random seed for a reproducible run")
@click.pass_context
def simulate(ctx, ticks: int, seed: int | None):
    """Run the live-activity simulation on a virtual clock.

    Each tick drifts the resource usage of running apps and may add a small
    income, briefly redeploy an app or expire an administrator session.
    Pending status reverts are allowed to finish before exiting.

    Examples:
        admindash simulate --ticks 20 --seed 42
    """
    workspace = ctx.obj["workspace"]
    generator = workspace.generator
    if seed is not None:
        generator.rng = random.Random(seed)

    notifications_before = len(workspace.store.notifications)
    transactions_before = len(workspace.store.transactions)

    generator.start()
    workspace.scheduler.advance(generator.settings.tick_interval * ticks)
    generator.pause()
    workspace.scheduler.run_until_idle()
    generator.stop()

    new_transactions = len(workspace.store.transactions) - transactions_before
    new_notifications = workspace.store.notifications[: len(workspace.store.notifications) - notifications_before]

    click.echo(f"Simulated {ticks} tick{'s' if ticks != 1 else ''}")
    click.echo(f"New transactions:  {new_transactions}")
    click.echo(f"New notifications: {len(new_notifications)}")
    for notification in reversed(new_notifications):
        click.echo(f"  {notification.title}: {notification.description}")


def register_commands(cli):
    """Register simulate command with main CLI."""
    cli.add_command(simulate)
