"""Tests for the net worth computation."""

from decimal import Decimal
from unittest.mock import MagicMock

from finanza.domain.models import (
    Account,
    AccountType,
    Currency,
    CustodyTag,
    Investment,
    Transaction,
    TransactionType,
)
from finanza.domain.services.net_worth import compute_net_worth_summary


def _account(account_id: str, kind: AccountType, balance: str, currency=Currency.USD) -> Account:
    return Account(
        id=account_id,
        name=account_id,
        type=kind,
        balance=Decimal(balance),
        currency=currency,
        credit_limit=Decimal("1000") if kind == AccountType.CREDIT_CARD else None,
    )


def test_net_worth_subtracts_debt_and_custody() -> None:
    """Card debt and custody reduce net worth; investments add to it."""
    accounts = [
        _account("bank", AccountType.CHECKING, "1000"),
        _account("bs", AccountType.SAVINGS, "4000", Currency.VES),
        _account("card", AccountType.CREDIT_CARD, "-300"),
    ]
    custody = Transaction(
        id="c1",
        description="held",
        amount=Decimal("200"),
        type=TransactionType.INCOME,
        category="Otros",
        date="2024-01-01",
        currency=Currency.USD,
        account_id="bank",
        pool=CustodyTag("Ana"),
    )
    investment = Investment(
        id="i1",
        name="SPY",
        initial_investment=Decimal("500"),
        quantity=Decimal("10"),
        buy_price=Decimal("50"),
        current_market_price=Decimal("55"),
        value=Decimal("550"),
        currency=Currency.USD,
    )
    logger = MagicMock()

    summary = compute_net_worth_summary(
        accounts,
        [custody],
        [investment],
        rate=Decimal("40"),
        logger=logger,
    )

    assert summary.liquid_total == Decimal("800")
    assert summary.credit_debt_total == Decimal("300")
    assert summary.custody_liability == Decimal("200")
    assert summary.investment_total == Decimal("550")
    assert summary.net_worth == Decimal("1150")
    assert summary.own_funds == Decimal("600")
    assert summary.exchange_rate == Decimal("40")
    logger.warning.assert_not_called()


def test_sign_anomalies_are_logged() -> None:
    """A positive card balance or negative cash balance logs a warning."""
    logger = MagicMock()

    compute_net_worth_summary(
        [
            _account("card", AccountType.CREDIT_CARD, "10"),
            _account("cash", AccountType.CASH, "-5"),
        ],
        [],
        [],
        rate=Decimal("40"),
        logger=logger,
    )

    assert logger.warning.call_count == 2
