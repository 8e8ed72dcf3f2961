"""Managed application commands."""

import click

from admindash.cli.error_handling import handle_domain_error
from admindash.domain.entities import AppPlatform, AppStatus
from admindash.domain.errors import DomainError

APP_PLATFORMS = [p.value for p in AppPlatform]
APP_STATUSES = [s.value for s in AppStatus]


@click.group()
def app_group():
    """Manage deployed applications."""
    pass


@app_group.command("list")
@click.option("--status", type=click.Choice(APP_STATUSES), help="Only apps with this status")
@click.pass_context
def list_apps(ctx, status: str | None):
    """List apps with their status and latest resource usage."""
    service = ctx.obj["workspace"].apps

    apps = service.list_apps(AppStatus(status) if status else None)
    if not apps:
        click.echo("No apps found.")
        return

    click.echo("\nApps:")
    click.echo("-" * 80)
    for app in apps:
        cpu = app.resources.cpu[-1] if app.resources.cpu else 0
        memory = app.resources.memory[-1] if app.resources.memory else 0
        click.echo(
            f"ID: {app.id:3d} | {app.name:20s} | {app.platform.value:12s} | "
            f"{app.status.value:9s} | CPU {cpu:3d}% | MEM {memory:3d}%"
        )


@app_group.command("show")
@click.argument("app_id", type=int)
@click.pass_context
def show_app(ctx, app_id: int):
    """Show app details, environment variables and recent deployments."""
    service = ctx.obj["workspace"].apps
    try:
        app = service.require_app(app_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"{app.name} ({app.platform.value})")
    click.echo(f"  Status:     {app.status.value}")
    click.echo(f"  Repository: {app.repository}")
    click.echo(f"  Deployed:   {app.last_deployed:%Y-%m-%d %H:%M}")
    click.echo(f"  Storage:    {app.resources.storage.used:.1f} / {app.resources.storage.total:.1f} GB")
    if app.environment_variables:
        click.echo("  Environment:")
        for key, value in sorted(app.environment_variables.items()):
            click.echo(f"    {key}={value}")
    if app.deployments:
        click.echo("  Deployments:")
        for deployment in app.deployments:
            click.echo(f"    {deployment.version:10s} {deployment.timestamp:%Y-%m-%d} {deployment.status.value}")


@app_group.command("add")
@click.argument("name")
@click.option("--platform", type=click.Choice(APP_PLATFORMS), required=True, help="App platform")
@click.option("--repository", required=True, help="Source repository")
@click.pass_context
def add_app(ctx, name: str, platform: str, repository: str):
    """Register a new app. New apps start Stopped.

    Examples:
        admindash app add "Billing API" --platform "API Service" --repository github.com/acme/billing
    """
    service = ctx.obj["workspace"].apps
    try:
        app = service.add_app(name, AppPlatform(platform), repository)
        click.echo(f"Created app '{app.name}' (ID: {app.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


def _set_status(ctx, app_id: int, status: AppStatus) -> None:
    service = ctx.obj["workspace"].apps
    try:
        app = service.set_status(app_id, status)
        click.echo(f"App '{app.name}' is now {app.status.value}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@app_group.command("start")
@click.argument("app_id", type=int)
@click.pass_context
def start_app(ctx, app_id: int):
    """Mark an app as Running."""
    _set_status(ctx, app_id, AppStatus.RUNNING)


@app_group.command("stop")
@click.argument("app_id", type=int)
@click.pass_context
def stop_app(ctx, app_id: int):
    """Mark an app as Stopped."""
    _set_status(ctx, app_id, AppStatus.STOPPED)


@app_group.command("delete")
@click.argument("app_id", type=int)
@click.pass_context
def delete_app(ctx, app_id: int):
    """Delete an app."""
    service = ctx.obj["workspace"].apps
    try:
        app = service.require_app(app_id)
        service.delete_app(app_id)
        click.echo(f"Deleted app '{app.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@app_group.group("env")
def env_group():
    """Manage app environment variables."""
    pass


@env_group.command("set")
@click.argument("app_id", type=int)
@click.argument("key")
@click.argument("value")
@click.option("--rename-from", "original_key", help="Existing variable to rename to KEY")
@click.pass_context
def set_env(ctx, app_id: int, key: str, value: str, original_key: str | None):
    """Add or change an environment variable.

    Examples:
        admindash app env set 1 LOG_LEVEL debug
        admindash app env set 1 DATABASE_HOST db2.example.com --rename-from DB_HOST
    """
    service = ctx.obj["workspace"].apps
    try:
        service.set_environment_variable(app_id, key, value, original_key=original_key)
        click.echo(f"Set {key} on app {app_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@env_group.command("unset")
@click.argument("app_id", type=int)
@click.argument("key")
@click.pass_context
def unset_env(ctx, app_id: int, key: str):
    """Remove an environment variable."""
    service = ctx.obj["workspace"].apps
    try:
        service.delete_environment_variable(app_id, key)
        click.echo(f"Removed {key} from app {app_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register app commands with main CLI."""
    cli.add_command(app_group, name="app")
