"""Notification commands."""

import click


@click.command("notifications")
@click.option("--unread", "unread_only", is_flag=True, help="Only unread notifications")
@click.option("--mark-read", is_flag=True, help="Mark all notifications as read after listing")
@click.pass_context
def notifications(ctx, unread_only: bool, mark_read: bool):
    """List notifications, newest first."""
    service = ctx.obj["workspace"].notifications

    items = service.list_notifications(unread_only=unread_only)
    if not items:
        click.echo("No notifications.")
    for notification in items:
        marker = " " if notification.read else "*"
        click.echo(
            f"{marker} {notification.timestamp:%Y-%m-%d %H:%M}  {notification.title}: {notification.description}"
        )

    if mark_read:
        service.mark_all_read()
        click.echo("All notifications marked as read.")


def register_commands(cli):
    """Register notification command with main CLI."""
    cli.add_command(notifications)
