"""Reset command."""

import click


@click.command("reset")
@click.confirmation_option(prompt="This erases all stored data and restores the defaults. Continue?")
@click.pass_context
def reset(ctx):
    """Erase all stored data and restore the defaults."""
    workspace = ctx.obj["workspace"]
    workspace.reset_all_data()
    workspace.scheduler.run_until_idle()
    click.echo("All data has been reset.")


def register_commands(cli):
    """Register reset command with main CLI."""
    cli.add_command(reset)
