"""Tests for the investment lifecycle."""

from decimal import Decimal

import pytest

from finanza.domain.errors import LedgerValidationError
from finanza.domain.models import Currency, InvestmentCategory, YieldPeriod
from finanza.domain.services.investments import (
    compute_performance,
    liquidate_position,
    mark_to_market,
    open_position,
    projected_annual_yield,
)


def _open(**overrides):
    fields = {
        "investment_id": "inv",
        "name": "SPY",
        "capital": Decimal("500"),
        "buy_price": Decimal("50"),
        "currency": Currency.USD,
    }
    fields.update(overrides)
    return open_position(**fields)


def test_open_position_derives_quantity_from_price() -> None:
    """Units default to capital divided by the buy price."""
    investment = _open()

    assert investment.quantity == Decimal("10")
    assert investment.value == Decimal("500")
    assert investment.performance == Decimal("0")


def test_unpriced_position_holds_one_unit() -> None:
    """Loans and other unpriced positions are a single unit."""
    investment = _open(
        buy_price=Decimal("0"),
        category=InvestmentCategory.FIXED_INCOME,
    )

    assert investment.quantity == Decimal("1")
    assert investment.value == Decimal("500")


def test_explicit_quantity_overrides_derivation() -> None:
    """A given quantity is kept as is."""
    investment = _open(quantity=Decimal("12"))

    assert investment.quantity == Decimal("12")


@pytest.mark.parametrize(
    "overrides",
    [
        {"capital": Decimal("0")},
        {"buy_price": Decimal("-1")},
        {"quantity": Decimal("0")},
    ],
)
def test_open_position_rejects_invalid_input(overrides) -> None:
    """Non-positive capital or units and negative prices are rejected."""
    with pytest.raises(LedgerValidationError):
        _open(**overrides)


def test_mark_to_market_updates_value_and_performance() -> None:
    """Repricing revalues the units and recomputes performance."""
    repriced = mark_to_market(_open(), Decimal("60"))

    assert repriced.value == Decimal("600")
    assert repriced.performance == Decimal("20")


def test_mark_to_market_requires_positive_price() -> None:
    """Zero prices are rejected."""
    with pytest.raises(LedgerValidationError):
        mark_to_market(_open(), Decimal("0"))


def test_partial_liquidation_shrinks_basis() -> None:
    """Selling 4 of 10 units leaves 6 units and a 300 basis."""
    remaining, proceeds = liquidate_position(_open(), Decimal("4"), Decimal("60"))

    assert remaining.quantity == Decimal("6")
    assert remaining.initial_investment == Decimal("300")
    assert proceeds == Decimal("240")


def test_full_liquidation_closes_position() -> None:
    """Selling every unit closes the position."""
    remaining, proceeds = liquidate_position(_open(), Decimal("10"), Decimal("55"))

    assert remaining.is_closed is True
    assert proceeds == Decimal("550")


def test_cannot_sell_more_than_held() -> None:
    """Overselling is rejected."""
    with pytest.raises(LedgerValidationError):
        liquidate_position(_open(), Decimal("11"), Decimal("50"))


def test_performance_is_zero_without_buy_price() -> None:
    """Unpriced positions report no performance."""
    assert compute_performance(Decimal("0"), Decimal("10")) == Decimal("0")


def test_projected_yield_annualizes_monthly_rate() -> None:
    """A monthly rate is multiplied by twelve."""
    loan = _open(
        buy_price=Decimal("0"),
        yield_rate=Decimal("2"),
        yield_period=YieldPeriod.MONTHLY,
    )

    assert projected_annual_yield(loan) == Decimal("120")
