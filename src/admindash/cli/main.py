"""Main CLI entry point."""

import logging

import click

from admindash.cli.error_handling import handle_storage_error
from admindash.storage.base import StorageError
from admindash.workspace import create_workspace

# Import and register all commands at module level
from admindash.cli.commands import (
    account,
    admin,
    apikey,
    app,
    budget,
    domain,
    message,
    notifications,
    reset,
    search,
    simulate,
    summary,
    task,
    transaction,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides ADMINDASH_DB_PATH environment variable)",
    envvar="ADMINDASH_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="ADMINDASH_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """admindash - Administration dashboard from the command line.

    Manage administrators, deployed apps, finances, tasks, messaging, API keys
    and custom domains, with simulated live activity.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Open storage only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            workspace = create_workspace(database_path=db_path)
        except StorageError as e:
            handle_storage_error(ctx, e)
            return
        ctx.obj["workspace"] = workspace
        ctx.call_on_close(workspace.shutdown)


# Register all commands
account.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
app.register_commands(cli)
admin.register_commands(cli)
task.register_commands(cli)
apikey.register_commands(cli)
domain.register_commands(cli)
message.register_commands(cli)
search.register_commands(cli)
summary.register_commands(cli)
notifications.register_commands(cli)
simulate.register_commands(cli)
reset.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
