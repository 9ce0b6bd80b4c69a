"""Pool segregation between personal, work and custody money.

Only pending work transactions feed the work pool, and custody balances are
liabilities owed back to their owners. Everything outside both pools is
personal money.
"""

from collections.abc import Iterable
from decimal import Decimal

from finanza.domain.models import (
    CustodyOwnerBalance,
    CustodySummary,
    CustodyTag,
    PersonalFlowSummary,
    PersonalTag,
    PoolKind,
    Transaction,
    TransactionType,
    WorkPoolSummary,
    WorkStatus,
    WorkTag,
)
from finanza.domain.services.currency import to_usd


def pool_of(transaction: Transaction) -> PoolKind:
    """Classify a transaction into exactly one pool.

    Args:
        transaction: Transaction to classify.

    Returns:
        PoolKind: Pool that owns the transaction.
    """
    pool = transaction.pool
    if isinstance(pool, CustodyTag):
        return PoolKind.CUSTODY
    if isinstance(pool, WorkTag):
        if pool.status == WorkStatus.PENDING:
            return PoolKind.WORK
        return PoolKind.WORK_SETTLED
    return PoolKind.PERSONAL


def personal_transactions(
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Return the transactions that belong to the user."""
    return [t for t in transactions if isinstance(t.pool, PersonalTag)]


def pending_work_transactions(
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Return pending work transactions, newest first."""
    pending = [t for t in transactions if pool_of(t) == PoolKind.WORK]
    return sorted(pending, key=lambda t: t.date, reverse=True)


def custody_transactions(
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Return third-party custody transactions, newest first."""
    held = [t for t in transactions if pool_of(t) == PoolKind.CUSTODY]
    return sorted(held, key=lambda t: t.date, reverse=True)


def work_pool_summary(
    transactions: Iterable[Transaction],
    rate,
) -> WorkPoolSummary:
    """Compute the pending work pool balance in USD.

    Args:
        transactions: Full transaction history.
        rate: VES per USD.

    Returns:
        WorkPoolSummary: Advances, expenses and the pending transactions.
    """
    pending = pending_work_transactions(transactions)
    advances = Decimal("0")
    expenses = Decimal("0")
    for transaction in pending:
        amount = to_usd(transaction.amount, transaction.currency, rate)
        if transaction.type == TransactionType.INCOME:
            advances += amount
        elif transaction.type == TransactionType.EXPENSE:
            expenses += amount
    return WorkPoolSummary(
        total_advances=advances,
        total_expenses=expenses,
        transactions=pending,
    )


def custody_summary(
    transactions: Iterable[Transaction],
    rate,
) -> CustodySummary:
    """Compute per-owner custody balances in USD.

    Args:
        transactions: Full transaction history.
        rate: VES per USD.

    Returns:
        CustodySummary: Owner balances and the custody transactions.
    """
    held = custody_transactions(transactions)
    entries: dict[str, Decimal] = {}
    exits: dict[str, Decimal] = {}
    for transaction in held:
        owner = transaction.pool.owner
        entries.setdefault(owner, Decimal("0"))
        exits.setdefault(owner, Decimal("0"))
        amount = to_usd(transaction.amount, transaction.currency, rate)
        if transaction.type == TransactionType.INCOME:
            entries[owner] += amount
        elif transaction.type == TransactionType.EXPENSE:
            exits[owner] += amount
    owners = [
        CustodyOwnerBalance(
            owner=owner,
            entries=entries[owner],
            exits=exits[owner],
        )
        for owner in entries
    ]
    return CustodySummary(owners=owners, transactions=held)


def personal_flow_summary(
    transactions: Iterable[Transaction],
    month: str,
    rate,
) -> PersonalFlowSummary:
    """Sum personal income and expense for a month in USD.

    Transfers and adjustments never count as income or expense.

    Args:
        transactions: Full transaction history.
        month: Month formatted as YYYY-MM.
        rate: VES per USD.

    Returns:
        PersonalFlowSummary: Income, expense and net for the month.
    """
    income = Decimal("0")
    expense = Decimal("0")
    for transaction in personal_transactions(transactions):
        if not transaction.date.startswith(month):
            continue
        if transaction.type == TransactionType.INCOME:
            income += to_usd(transaction.amount, transaction.currency, rate)
        elif transaction.type == TransactionType.EXPENSE:
            expense += to_usd(transaction.amount, transaction.currency, rate)
    return PersonalFlowSummary(month=month, income=income, expense=expense)


__all__ = [
    "pool_of",
    "personal_transactions",
    "pending_work_transactions",
    "custody_transactions",
    "work_pool_summary",
    "custody_summary",
    "personal_flow_summary",
]
