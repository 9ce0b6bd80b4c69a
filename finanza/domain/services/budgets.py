"""Budget resolution with carry-forward and spend evaluation."""

from collections.abc import Iterable
from decimal import Decimal

from finanza.domain.constants import NEAR_LIMIT_PCT
from finanza.domain.models import (
    Budget,
    BudgetOverview,
    BudgetProgress,
    BudgetStatus,
    Currency,
    Transaction,
    TransactionType,
)
from finanza.domain.services.currency import convert

_HUNDRED = Decimal("100")


def active_budget(
    budgets: Iterable[Budget],
    category: str,
    month: str,
) -> Budget | None:
    """Resolve the limit in force for a category and month.

    An exact (category, month) record wins. Otherwise the latest record from
    an earlier month carries forward. Month keys are zero-padded, so string
    comparison orders them chronologically.

    Args:
        budgets: Stored budget records.
        category: Expense category.
        month: Month formatted as YYYY-MM.

    Returns:
        Budget | None: Active budget, or None when none was ever set.
    """
    latest_prior: Budget | None = None
    for budget in budgets:
        if budget.category != category:
            continue
        if budget.month == month:
            return budget
        if budget.month < month and (
            latest_prior is None or budget.month > latest_prior.month
        ):
            latest_prior = budget
    return latest_prior


def active_budgets(budgets: Iterable[Budget], month: str) -> list[Budget]:
    """Return the active budget of every category seen in ``budgets``."""
    records = list(budgets)
    categories = list(dict.fromkeys(budget.category for budget in records))
    resolved = (active_budget(records, category, month) for category in categories)
    return [budget for budget in resolved if budget is not None]


def compute_spent(
    category: str,
    month: str,
    transactions: Iterable[Transaction],
    budget_currency: Currency,
    rate,
) -> Decimal:
    """Sum the month's expenses for a category in the budget currency.

    Args:
        category: Expense category.
        month: Month formatted as YYYY-MM.
        transactions: Full transaction history.
        budget_currency: Currency the result is expressed in.
        rate: VES per USD.

    Returns:
        Decimal: Amount spent.
    """
    spent = Decimal("0")
    for transaction in transactions:
        if transaction.type != TransactionType.EXPENSE:
            continue
        if transaction.category != category:
            continue
        if not transaction.date.startswith(month):
            continue
        spent += convert(
            transaction.amount,
            transaction.currency,
            budget_currency,
            rate,
        )
    return spent


def budget_status(spent: Decimal, limit: Decimal) -> tuple[Decimal, BudgetStatus]:
    """Return the capped usage percentage and its status band."""
    divisor = limit if limit > 0 else Decimal("1")
    percentage = min(_HUNDRED, spent / divisor * _HUNDRED)
    if spent > limit:
        return percentage, BudgetStatus.EXCEEDED
    if percentage >= NEAR_LIMIT_PCT:
        return percentage, BudgetStatus.NEAR_LIMIT
    return percentage, BudgetStatus.ON_TRACK


def evaluate_budget(
    budget: Budget,
    month: str,
    transactions: Iterable[Transaction],
    rate,
) -> BudgetProgress:
    """Evaluate a budget against the expenses of ``month``."""
    spent = compute_spent(
        budget.category,
        month,
        transactions,
        budget.currency,
        rate,
    )
    percentage, status = budget_status(spent, budget.limit)
    return BudgetProgress(
        budget=budget,
        month=month,
        spent=spent,
        percentage=percentage,
        status=status,
        is_carried_forward=budget.month != month,
    )


def budget_overview(
    budgets: Iterable[Budget],
    transactions: Iterable[Transaction],
    month: str,
    rate,
) -> BudgetOverview:
    """Evaluate every active budget of a month with per-currency totals.

    Args:
        budgets: Stored budget records.
        transactions: Full transaction history.
        month: Month formatted as YYYY-MM.
        rate: VES per USD.

    Returns:
        BudgetOverview: Progress items and totals per currency.
    """
    history = list(transactions)
    items = [
        evaluate_budget(budget, month, history, rate)
        for budget in active_budgets(budgets, month)
    ]
    limit_totals = {currency: Decimal("0") for currency in Currency}
    spent_totals = {currency: Decimal("0") for currency in Currency}
    for item in items:
        limit_totals[item.budget.currency] += item.budget.limit
        spent_totals[item.budget.currency] += item.spent
    return BudgetOverview(
        month=month,
        items=items,
        limit_totals=limit_totals,
        spent_totals=spent_totals,
    )


def replace_budget(budgets: Iterable[Budget], budget: Budget) -> list[Budget]:
    """Drop any record for the same (category, month) and append ``budget``."""
    kept = [
        existing
        for existing in budgets
        if not (
            existing.category == budget.category
            and existing.month == budget.month
        )
    ]
    return [*kept, budget]


__all__ = [
    "active_budget",
    "active_budgets",
    "compute_spent",
    "budget_status",
    "evaluate_budget",
    "budget_overview",
    "replace_budget",
]
