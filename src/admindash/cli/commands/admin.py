"""Administrator commands."""

import click

from admindash.cli.error_handling import handle_domain_error
from admindash.domain.admin import PERMISSIONS
from admindash.domain.entities import AdministratorRole
from admindash.domain.errors import DomainError

ADMIN_ROLES = [r.value for r in AdministratorRole]


@click.group()
def admin_group():
    """Manage administrators."""
    pass


@admin_group.command("list")
@click.pass_context
def list_admins(ctx):
    """List administrators. The signed-in administrator is marked with *."""
    service = ctx.obj["workspace"].admins

    admins = service.list_admins()
    if not admins:
        click.echo("No administrators found.")
        return

    current = service.current_user
    click.echo("\nAdministrators:")
    click.echo("-" * 80)
    for admin in admins:
        marker = "*" if current is not None and current.id == admin.id else " "
        click.echo(
            f"{marker}ID: {admin.id:3d} | {admin.name:20s} | {admin.email:24s} | "
            f"{admin.role.value:20s} | {admin.status.value}"
        )


@admin_group.command("add")
@click.argument("name")
@click.argument("email")
@click.option("--role", type=click.Choice(ADMIN_ROLES), required=True, help="Administrator role")
@click.pass_context
def add_admin(ctx, name: str, email: str, role: str):
    """Add an administrator.

    Examples:
        admindash admin add "Ada Lovelace" ada@example.com --role Manager
    """
    service = ctx.obj["workspace"].admins
    try:
        admin = service.add_admin(name, email, AdministratorRole(role))
        click.echo(f"Created administrator '{admin.name}' (ID: {admin.id})")
    except DomainError as e:
        handle_domain_error(ctx, e)


@admin_group.command("delete")
@click.argument("admin_id", type=int)
@click.pass_context
def delete_admin(ctx, admin_id: int):
    """Delete an administrator."""
    service = ctx.obj["workspace"].admins
    try:
        admin = service.require_admin(admin_id)
        service.delete_admin(admin_id)
        click.echo(f"Deleted administrator '{admin.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@admin_group.command("permissions")
@click.argument("admin_id", type=int)
@click.argument("permissions", nargs=-1)
@click.pass_context
def set_permissions(ctx, admin_id: int, permissions: tuple[str, ...]):
    """Replace an administrator's permissions.

    Passing no PERMISSIONS clears them. Known permissions:
    manage_users, view_reports, edit_settings, manage_billing, access_logs,
    deploy_apps, manage_database, sudo_access, api_access, delete_content,
    moderate_comments, manage_support_tickets.
    """
    service = ctx.obj["workspace"].admins
    try:
        admin = service.set_permissions(admin_id, permissions)
        granted = ", ".join(p for p in PERMISSIONS if p in admin.permissions) or "(none)"
        click.echo(f"Permissions of '{admin.name}': {granted}")
    except DomainError as e:
        handle_domain_error(ctx, e)


@admin_group.command("login")
@click.argument("admin_id", type=int)
@click.pass_context
def login(ctx, admin_id: int):
    """Sign in as an administrator."""
    service = ctx.obj["workspace"].admins
    try:
        admin = service.login(admin_id)
        click.echo(f"Signed in as '{admin.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@admin_group.command("logout")
@click.pass_context
def logout(ctx):
    """Sign out the current administrator."""
    ctx.obj["workspace"].admins.logout()
    click.echo("Signed out")


@admin_group.command("activity")
@click.argument("admin_id", type=int)
@click.pass_context
def show_activity(ctx, admin_id: int):
    """Show an administrator's activity log, newest first."""
    service = ctx.obj["workspace"].admins
    try:
        admin = service.require_admin(admin_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if not admin.activity_logs:
        click.echo("No activity recorded.")
        return
    for log in admin.activity_logs:
        click.echo(f"{log.timestamp:%Y-%m-%d %H:%M:%S}  {log.action:18s} {log.details} ({log.ip_address})")


def register_commands(cli):
    """Register administrator commands with main CLI."""
    cli.add_command(admin_group, name="admin")
