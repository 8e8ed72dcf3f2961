"""Utility for resolving account names to IDs."""

from admindash.domain.account import AccountService
from admindash.domain.errors import NotFoundError, account_name_not_found, account_not_found


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID to account ID.

    Args:
        account_service: AccountService instance
        account: Account name (str) or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If account is not found
    """
    if isinstance(account, int):
        account_id = account
    else:
        try:
            account_id = int(account)
        except (ValueError, TypeError):
            account_id = None

    if account_id is not None:
        if account_service.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        return account_id

    found = account_service.get_account_by_name(account)
    if found is None:
        raise NotFoundError(account_name_not_found(account))
    return found.id
