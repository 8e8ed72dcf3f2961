"""CLI helper for account arguments."""

from __future__ import annotations

import click

from admindash.cli.error_handling import fail
from admindash.domain.account import AccountService
from admindash.domain.errors import NotFoundError
from admindash.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve an account name or ID given on the command line.

    Exits with status 1 when no account matches.
    """
    try:
        return resolve_account(account_service, account)
    except NotFoundError as exc:
        fail(ctx, str(exc))
