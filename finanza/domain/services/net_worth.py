"""Net worth breakdown separating own money from custody liabilities."""

from collections.abc import Iterable
from decimal import Decimal
from logging import Logger

from finanza.domain.models import (
    Account,
    Investment,
    NetWorthSummary,
    Transaction,
)
from finanza.domain.services.credit import compute_credit_summary
from finanza.domain.services.currency import to_usd
from finanza.domain.services.pools import custody_summary
from finanza.domain.services.validation import validate_balance_sign
from finanza.utils.decimal_utils import coerce_decimal


def compute_net_worth_summary(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    investments: Iterable[Investment],
    *,
    rate,
    logger: Logger,
) -> NetWorthSummary:
    """Compute the personal net worth in USD.

    Credit card balances are stored negative, so summing signed balances
    already subtracts card debt from liquid funds.

    Args:
        accounts: Current accounts.
        transactions: Full transaction history.
        investments: Active investment positions.
        rate: VES per USD.
        logger: Logger used for warnings.

    Returns:
        NetWorthSummary: Liquid funds, liabilities and investments.
    """
    liquid_total = Decimal("0")
    credit_debt_total = Decimal("0")
    for account in accounts:
        validate_balance_sign(account, logger)
        liquid_total += to_usd(account.balance, account.currency, rate)
        if account.is_credit:
            debt = compute_credit_summary(account).debt
            credit_debt_total += to_usd(debt, account.currency, rate)

    custody_liability = custody_summary(transactions, rate).total_liability
    investment_total = sum(
        (to_usd(inv.value, inv.currency, rate) for inv in investments),
        Decimal("0"),
    )
    net_worth = liquid_total - custody_liability + investment_total
    return NetWorthSummary(
        liquid_total=liquid_total,
        credit_debt_total=credit_debt_total,
        custody_liability=custody_liability,
        investment_total=investment_total,
        net_worth=net_worth,
        exchange_rate=coerce_decimal(rate),
    )


__all__ = ["compute_net_worth_summary"]
