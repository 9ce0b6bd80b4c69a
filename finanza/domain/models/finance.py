"""Domain models for derived, read-only ledger views."""

from dataclasses import dataclass, field
from decimal import Decimal

from finanza.domain.models.budgets import Budget
from finanza.domain.models.enums import (
    BudgetStatus,
    Currency,
    WorkPoolStatus,
)
from finanza.domain.models.transactions import Transaction


@dataclass(frozen=True)
class CreditSummary:
    """Debt and utilization derived from a credit card account.

    Attributes:
        account_id: Credit card account identifier.
        account_name: Credit card display name.
        debt: Current debt, never negative.
        limit: Credit line, never negative.
        available: Credit still available.
        utilization_pct: Debt over limit in percent, within [0, 100].
        is_high_usage: True when utilization reaches the alert threshold.
    """

    account_id: str
    account_name: str
    debt: Decimal
    limit: Decimal
    available: Decimal
    utilization_pct: Decimal
    is_high_usage: bool


@dataclass(frozen=True)
class BudgetProgress:
    """Active budget for a month with the amount spent against it."""

    budget: Budget
    month: str
    spent: Decimal
    percentage: Decimal
    status: BudgetStatus
    is_carried_forward: bool = False

    @property
    def remaining(self) -> Decimal:
        """Return the limit minus the amount spent."""
        return self.budget.limit - self.spent


@dataclass(frozen=True)
class BudgetOverview:
    """Every active budget of a month plus per-currency totals."""

    month: str
    items: list[BudgetProgress]
    limit_totals: dict[Currency, Decimal]
    spent_totals: dict[Currency, Decimal]


@dataclass(frozen=True)
class WorkPoolSummary:
    """Running balance of pending employer advances and work expenses."""

    total_advances: Decimal
    total_expenses: Decimal
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def balance(self) -> Decimal:
        """Return advances minus expenses in USD."""
        return self.total_advances - self.total_expenses

    @property
    def status(self) -> WorkPoolStatus:
        """Return FUNDED while advances cover the spend, else OWED."""
        if self.balance >= 0:
            return WorkPoolStatus.FUNDED
        return WorkPoolStatus.OWED

    @property
    def spend_ratio_pct(self) -> Decimal:
        """Return expenses over advances in percent, capped at 100."""
        if self.total_advances <= 0:
            return Decimal("0")
        ratio = self.total_expenses / self.total_advances * Decimal("100")
        return min(Decimal("100"), ratio)


@dataclass(frozen=True)
class CustodyOwnerBalance:
    """Money held on behalf of a single third party, in USD."""

    owner: str
    entries: Decimal
    exits: Decimal

    @property
    def balance(self) -> Decimal:
        """Return what is owed back to the owner."""
        return self.entries - self.exits


@dataclass(frozen=True)
class CustodySummary:
    """Custody liabilities grouped by owner."""

    owners: list[CustodyOwnerBalance]
    transactions: list[Transaction] = field(default_factory=list)

    @property
    def total_liability(self) -> Decimal:
        """Return the sum of every owner balance."""
        return sum(
            (owner.balance for owner in self.owners),
            Decimal("0"),
        )


@dataclass(frozen=True)
class PersonalFlowSummary:
    """Personal income and expense for a month, normalized to USD."""

    month: str
    income: Decimal
    expense: Decimal

    @property
    def net(self) -> Decimal:
        """Return income minus expense."""
        return self.income - self.expense


@dataclass(frozen=True)
class NetWorthSummary:
    """Personal net worth breakdown in USD.

    Attributes:
        liquid_total: Signed sum of account balances, credit debt included.
        credit_debt_total: Sum of credit card debts.
        custody_liability: Money held for third parties.
        investment_total: Mark-to-market value of investments.
        net_worth: Liquid funds minus custody plus investments.
        exchange_rate: Rate used to normalize VES amounts.
    """

    liquid_total: Decimal
    credit_debt_total: Decimal
    custody_liability: Decimal
    investment_total: Decimal
    net_worth: Decimal
    exchange_rate: Decimal

    @property
    def own_funds(self) -> Decimal:
        """Return the liquid funds that belong to the user."""
        return max(Decimal("0"), self.liquid_total - self.custody_liability)


__all__ = [
    "CreditSummary",
    "BudgetProgress",
    "BudgetOverview",
    "WorkPoolSummary",
    "CustodyOwnerBalance",
    "CustodySummary",
    "PersonalFlowSummary",
    "NetWorthSummary",
]
