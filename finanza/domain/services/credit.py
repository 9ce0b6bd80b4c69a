"""Credit card debt and utilization derived from account balances."""

from collections.abc import Iterable
from decimal import Decimal

from finanza.domain.constants import HIGH_UTILIZATION_PCT
from finanza.domain.models import Account, CreditSummary

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def debt_to_balance(initial_debt: Decimal) -> Decimal:
    """Return the stored balance for an entered credit card debt."""
    return -initial_debt


def compute_credit_summary(account: Account) -> CreditSummary:
    """Derive debt, availability and utilization for a credit card.

    Args:
        account: Credit card account.

    Returns:
        CreditSummary: Derived credit figures.

    Raises:
        ValueError: If the account is not a credit card.
    """
    if not account.is_credit:
        raise ValueError(f"Account {account.id} is not a credit card")
    debt = max(_ZERO, -account.balance)
    limit = max(_ZERO, account.credit_limit or _ZERO)
    available = max(_ZERO, limit - debt)
    utilization = min(_HUNDRED, debt / limit * _HUNDRED) if limit > 0 else _ZERO
    return CreditSummary(
        account_id=account.id,
        account_name=account.name,
        debt=debt,
        limit=limit,
        available=available,
        utilization_pct=utilization,
        is_high_usage=utilization >= HIGH_UTILIZATION_PCT,
    )


def credit_overview(accounts: Iterable[Account]) -> list[CreditSummary]:
    """Return credit summaries for every credit card account."""
    return [
        compute_credit_summary(account)
        for account in accounts
        if account.is_credit
    ]


__all__ = ["debt_to_balance", "compute_credit_summary", "credit_overview"]
