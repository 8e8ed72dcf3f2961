"""CLI error rendering."""

import click

from admindash.domain.errors import DomainError
from admindash.storage.base import StorageError


def fail(ctx: click.Context, message: str) -> None:
    """Print message to stderr as an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error and exit with failure."""
    fail(ctx, str(error))


def handle_storage_error(ctx: click.Context, error: StorageError) -> None:
    fail(ctx, f"Storage unavailable: {error}")
