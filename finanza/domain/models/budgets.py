"""Domain model for monthly category budgets."""

from dataclasses import dataclass
from decimal import Decimal

from finanza.domain.models.enums import Currency


@dataclass(frozen=True)
class Budget:
    """Spending ceiling for one category in one calendar month.

    Attributes:
        id: Unique budget identifier.
        category: Expense category the limit applies to.
        limit: Positive spending ceiling in ``currency``.
        currency: Currency of ``limit``.
        month: Month formatted as YYYY-MM.
    """

    id: str
    category: str
    limit: Decimal
    currency: Currency
    month: str


__all__ = ["Budget"]
