"""Budget domain service."""

from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from admindash.domain import summary
from admindash.domain.entities import Budget, BudgetProgress
from admindash.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    budget_not_found,
    duplicate_budget_category,
)
from admindash.utils.amount_parser import quantize_amount
from admindash.utils.ids import next_sequential_id

if TYPE_CHECKING:
    from admindash.storage.entity_store import EntityStore


class BudgetService:
    """Service for managing per-category spending limits.

    Only the limit is stored. Spent is computed from expense transactions
    whenever progress is requested, so it can never drift from them.
    """

    def __init__(self, store: "EntityStore"):
        """Initialize budget service.

        Args:
            store: Entity store
        """
        self.store = store

    def list_budgets(self) -> list[Budget]:
        return list(self.store.budgets)

    def get_budget(self, budget_id: int) -> Optional[Budget]:
        for budget in self.store.budgets:
            if budget.id == budget_id:
                return budget
        return None

    def require_budget(self, budget_id: int) -> Budget:
        budget = self.get_budget(budget_id)
        if budget is None:
            raise NotFoundError(budget_not_found(budget_id))
        return budget

    def _validate(self, category: str, limit: Decimal, exclude_id: Optional[int] = None) -> tuple[str, Decimal]:
        category = category.strip()
        if not category:
            raise ValidationError("Budget category is required")
        limit = quantize_amount(limit)
        if limit <= 0:
            raise ValidationError(f"Budget limit must be positive, got {limit}")
        for budget in self.store.budgets:
            if budget.id != exclude_id and budget.category == category:
                raise ConflictError(duplicate_budget_category(category))
        return category, limit

    def add_budget(self, category: str, limit: Decimal) -> Budget:
        """Create a budget for a category.

        Args:
            category: Expense category the budget tracks
            limit: Positive spending limit

        Returns:
            The created budget

        Raises:
            ValidationError: If category is blank or limit is not positive
            ConflictError: If the category already has a budget
        """
        category, limit = self._validate(category, limit)
        budget = Budget(
            id=next_sequential_id(b.id for b in self.store.budgets),
            category=category,
            limit=limit,
        )
        self.store.budgets = self.store.budgets + (budget,)
        return budget

    def update_budget(self, budget_id: int, category: str, limit: Decimal) -> Budget:
        """Change a budget's category and limit.

        Raises:
            NotFoundError: If budget not found
            ValidationError: If category is blank or limit is not positive
            ConflictError: If another budget already tracks the category
        """
        budget = self.require_budget(budget_id)
        category, limit = self._validate(category, limit, exclude_id=budget_id)
        updated = replace(budget, category=category, limit=limit)
        self.store.budgets = tuple(updated if b.id == budget_id else b for b in self.store.budgets)
        return updated

    def delete_budget(self, budget_id: int) -> None:
        self.require_budget(budget_id)
        self.store.budgets = tuple(b for b in self.store.budgets if b.id != budget_id)

    def spent_for(self, category: str) -> Decimal:
        """Sum of expense amounts recorded under category."""
        return summary.spent_in_category(self.store.transactions, category)

    def budget_progress(self) -> list[BudgetProgress]:
        return summary.budget_progress(self.store.budgets, self.store.transactions)
