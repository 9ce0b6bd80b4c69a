"""Domain model for the full persisted entity set."""

from dataclasses import dataclass, field

from finanza.domain.constants import (
    DEFAULT_EXPENSE_CATEGORIES,
    DEFAULT_INCOME_CATEGORIES,
)
from finanza.domain.models.accounts import Account
from finanza.domain.models.budgets import Budget
from finanza.domain.models.investments import Investment
from finanza.domain.models.transactions import Transaction


@dataclass(frozen=True)
class EntitySnapshot:
    """Immutable snapshot of every entity owned by a user session."""

    accounts: tuple[Account, ...] = ()
    transactions: tuple[Transaction, ...] = ()
    investments: tuple[Investment, ...] = ()
    budgets: tuple[Budget, ...] = ()
    expense_categories: tuple[str, ...] = field(
        default=DEFAULT_EXPENSE_CATEGORIES
    )
    income_categories: tuple[str, ...] = field(
        default=DEFAULT_INCOME_CATEGORIES
    )

    @classmethod
    def empty(cls) -> "EntitySnapshot":
        """Return a snapshot with no entities and default categories."""
        return cls()


__all__ = ["EntitySnapshot"]
