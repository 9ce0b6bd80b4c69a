"""Ledger engine translating transactions into account balance deltas.

Applying a transaction with direction +1 and then -1 (or the reverse) leaves
every balance exactly where it started. Add, edit and delete are built on
that round trip.
"""

from collections.abc import Iterable
from dataclasses import replace
from decimal import Decimal

from finanza.domain.models import (
    Account,
    AdjustmentDirection,
    Transaction,
    TransactionType,
)

APPLY = 1
REVERT = -1


def _primary_delta(transaction: Transaction) -> Decimal:
    amount = transaction.amount
    commission = transaction.commission or Decimal("0")
    if transaction.type == TransactionType.EXPENSE:
        return -(amount + commission)
    if transaction.type == TransactionType.INCOME:
        return amount - commission
    if transaction.type == TransactionType.TRANSFER:
        # Transfer fees are charged on the receiving leg.
        return -amount
    if transaction.adjustment_direction == AdjustmentDirection.PLUS:
        return amount
    return -amount


def balance_deltas(
    transaction: Transaction,
    direction: int = APPLY,
) -> dict[str, Decimal]:
    """Return the signed balance change per affected account id.

    Args:
        transaction: Transaction to translate.
        direction: APPLY (+1) to book it, REVERT (-1) to undo it.

    Returns:
        dict[str, Decimal]: Delta keyed by account id.

    Raises:
        ValueError: If direction is not +1 or -1.
    """
    if direction not in (APPLY, REVERT):
        raise ValueError(f"Direction must be +1 or -1, got {direction}")
    sign = Decimal(direction)
    deltas: dict[str, Decimal] = {}
    if transaction.account_id:
        deltas[transaction.account_id] = sign * _primary_delta(transaction)
    if (
        transaction.type == TransactionType.TRANSFER
        and transaction.to_account_id
        and transaction.to_account_id != transaction.account_id
    ):
        arrival = (
            transaction.target_amount
            if transaction.target_amount is not None
            else transaction.amount
        )
        commission = transaction.commission or Decimal("0")
        deltas[transaction.to_account_id] = sign * (arrival - commission)
    return deltas


def apply_impact(
    accounts: Iterable[Account],
    transaction: Transaction,
    direction: int = APPLY,
) -> list[Account]:
    """Apply or revert a transaction on a set of accounts.

    Legs pointing at accounts that are not in the set are skipped.

    Args:
        accounts: Current accounts.
        transaction: Transaction to book or undo.
        direction: APPLY (+1) or REVERT (-1).

    Returns:
        list[Account]: New account list; untouched accounts are reused.
    """
    deltas = balance_deltas(transaction, direction)
    return [
        replace(account, balance=account.balance + deltas[account.id])
        if account.id in deltas
        else account
        for account in accounts
    ]


def reapply_impact(
    accounts: Iterable[Account],
    original: Transaction,
    updated: Transaction,
) -> list[Account]:
    """Undo ``original`` and book ``updated`` in its place."""
    reverted = apply_impact(accounts, original, REVERT)
    return apply_impact(reverted, updated, APPLY)


__all__ = [
    "APPLY",
    "REVERT",
    "balance_deltas",
    "apply_impact",
    "reapply_impact",
]
