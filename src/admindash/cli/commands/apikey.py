"""API key commands."""

import click

from admindash.cli.error_handling import handle_domain_error
from admindash.domain.errors import DomainError


def _mask(secret: str) -> str:
    return f"{secret[:10]}...{secret[-4:]}"


@click.group()
def apikey_group():
    """Manage API keys."""
    pass


@apikey_group.command("list")
@click.pass_context
def list_api_keys(ctx):
    """List API keys. Secrets are masked."""
    service = ctx.obj["workspace"].api_keys

    api_keys = service.list_api_keys()
    if not api_keys:
        click.echo("No API keys found.")
        return

    for api_key in api_keys:
        last_used = f"{api_key.last_used:%Y-%m-%d}" if api_key.last_used else "never"
        click.echo(
            f"{api_key.id:20s} | {api_key.name:24s} | {_mask(api_key.key)} | "
            f"{api_key.status.value:7s} | last used {last_used} | {', '.join(sorted(api_key.scopes))}"
        )


@apikey_group.command("create")
@click.argument("name")
@click.option("--scope", "scopes", multiple=True, help="Permission granted to the key (repeatable)")
@click.pass_context
def create_api_key(ctx, name: str, scopes: tuple[str, ...]):
    """Create an API key. The secret is shown only once.

    Examples:
        admindash apikey create "CI pipeline" --scope deploy_apps --scope view_reports
    """
    service = ctx.obj["workspace"].api_keys
    try:
        api_key = service.add_api_key(name, scopes)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created API key '{api_key.name}' (ID: {api_key.id})")
    click.echo(f"Secret: {api_key.key}")
    click.echo("Store it now; it will not be shown again.")


@apikey_group.command("revoke")
@click.argument("key_id")
@click.pass_context
def revoke_api_key(ctx, key_id: str):
    """Revoke an API key."""
    service = ctx.obj["workspace"].api_keys
    try:
        api_key = service.revoke_api_key(key_id)
        click.echo(f"Revoked API key '{api_key.name}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


@apikey_group.command("delete")
@click.argument("key_id")
@click.pass_context
def delete_api_key(ctx, key_id: str):
    """Delete an API key."""
    service = ctx.obj["workspace"].api_keys
    try:
        service.delete_api_key(key_id)
        click.echo(f"Deleted API key {key_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register API key commands with main CLI."""
    cli.add_command(apikey_group, name="apikey")
