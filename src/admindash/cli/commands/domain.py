"""Custom domain commands."""

import click

from admindash.cli.error_handling import handle_domain_error
from admindash.domain.errors import DomainError


@click.group()
def domain_group():
    """Manage custom domains."""
    pass


@domain_group.command("list")
@click.pass_context
def list_domains(ctx):
    """List custom domains and their DNS records."""
    service = ctx.obj["workspace"].domains

    domains = service.list_domains()
    if not domains:
        click.echo("No custom domains found.")
        return

    for custom_domain in domains:
        click.echo(f"ID: {custom_domain.id:3d} | {custom_domain.domain_name:36s} | {custom_domain.status.value}")
        for record in custom_domain.dns_records:
            click.echo(f"      {record.type:5s} {record.host:10s} {record.value}  (TTL {record.ttl})")


@domain_group.command("add")
@click.argument("name")
@click.pass_context
def add_domain(ctx, name: str):
    """Add a custom domain and print the TXT record to create."""
    service = ctx.obj["workspace"].domains
    try:
        custom_domain = service.add_domain(name)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Added domain '{custom_domain.domain_name}' (ID: {custom_domain.id})")
    click.echo("Create this DNS record, then run 'admindash domain verify':")
    for record in custom_domain.dns_records:
        click.echo(f"  {record.type} {record.host} {record.value} (TTL {record.ttl})")


@domain_group.command("verify")
@click.argument("domain_id", type=int)
@click.pass_context
def verify_domain(ctx, domain_id: int):
    """Check a domain's DNS records and report the outcome."""
    workspace = ctx.obj["workspace"]
    try:
        workspace.domains.verify_domain(domain_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo("Verifying...")
    workspace.scheduler.run_until_idle()
    custom_domain = workspace.domains.require_domain(domain_id)
    click.echo(f"Domain '{custom_domain.domain_name}' is {custom_domain.status.value}")


@domain_group.command("delete")
@click.argument("domain_id", type=int)
@click.pass_context
def delete_domain(ctx, domain_id: int):
    """Remove a custom domain."""
    service = ctx.obj["workspace"].domains
    try:
        service.delete_domain(domain_id)
        click.echo(f"Deleted domain {domain_id}")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register custom domain commands with main CLI."""
    cli.add_command(domain_group, name="domain")
