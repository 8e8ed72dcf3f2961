"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account_id: int) -> str:
    return f"Account {account_id} not found"


def account_name_not_found(name: str) -> str:
    return f"Account '{name}' not found"


def admin_not_found(admin_id: int) -> str:
    return f"Administrator {admin_id} not found"


def app_not_found(app_id: int) -> str:
    return f"App {app_id} not found"


def budget_not_found(budget_id: int) -> str:
    return f"Budget {budget_id} not found"


def task_not_found(task_id: int) -> str:
    return f"Task {task_id} not found"


def conversation_not_found(conversation_id: int) -> str:
    return f"Conversation {conversation_id} not found"


def api_key_not_found(key_id: str) -> str:
    return f"API key '{key_id}' not found"


def domain_not_found(domain_id: int) -> str:
    return f"Domain {domain_id} not found"


def unknown_permissions(names: set[str]) -> str:
    """Return message for permission or scope names outside the known list."""
    return f"Unknown permission(s): {', '.join(sorted(names))}"


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account still has transactions."""
    return (
        f"Cannot delete account {account_id}: it has "
        f"{transaction_count} transaction{'s' if transaction_count != 1 else ''}. "
        "Please reassign or delete them first."
    )


def duplicate_budget_category(category: str) -> str:
    return f"A budget for category '{category}' already exists"
