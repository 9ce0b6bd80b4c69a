"""Investment lifecycle: opening, repricing, partial sales and yield."""

from dataclasses import replace
from decimal import Decimal

from finanza.domain.errors import LedgerValidationError
from finanza.domain.models import (
    Currency,
    Investment,
    InvestmentCategory,
    YieldPeriod,
)

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")


def compute_performance(buy_price: Decimal, price: Decimal) -> Decimal:
    """Return the price change versus the buy price in percent."""
    if buy_price > 0:
        return (price - buy_price) / buy_price * _HUNDRED
    return _ZERO


def open_position(
    *,
    investment_id: str,
    name: str,
    capital: Decimal,
    buy_price: Decimal,
    currency: Currency,
    category: InvestmentCategory = InvestmentCategory.STOCKS,
    quantity: Decimal | None = None,
    current_market_price: Decimal | None = None,
    ticker: str | None = None,
    broker_id: str | None = None,
    yield_rate: Decimal | None = None,
    yield_period: YieldPeriod | None = None,
    date: str | None = None,
) -> Investment:
    """Build a freshly opened position.

    Units default to ``capital / buy_price``. Unpriced positions such as
    loans hold a single unit valued at the capital.

    Args:
        investment_id: Identifier for the new position.
        name: Display name.
        capital: Amount invested, excluding commission.
        buy_price: Cost per unit, zero for unpriced positions.
        currency: Position currency.
        category: Asset class.
        quantity: Explicit units, overriding the derived quantity.
        current_market_price: Latest known price, if any.
        ticker: Market symbol.
        broker_id: Broker account that funded the position.
        yield_rate: Income rate in percent.
        yield_period: Period of ``yield_rate``.
        date: Opening date.

    Returns:
        Investment: New position with zero performance.

    Raises:
        LedgerValidationError: If capital, price or quantity are invalid.
    """
    if capital <= 0:
        raise LedgerValidationError("Investment capital must be positive")
    if buy_price < 0:
        raise LedgerValidationError("Buy price cannot be negative")
    if quantity is not None:
        units = quantity
    elif buy_price > 0:
        units = capital / buy_price
    else:
        units = Decimal("1")
    if units <= 0:
        raise LedgerValidationError("Investment quantity must be positive")
    market_price = current_market_price or _ZERO
    unit_value = market_price or buy_price or capital
    return Investment(
        id=investment_id,
        name=name,
        initial_investment=capital,
        quantity=units,
        buy_price=buy_price,
        current_market_price=market_price,
        value=units * unit_value,
        currency=currency,
        performance=_ZERO,
        category=category,
        ticker=ticker,
        broker_id=broker_id,
        yield_rate=yield_rate,
        yield_period=yield_period,
        date=date,
    )


def mark_to_market(investment: Investment, price: Decimal) -> Investment:
    """Revalue a position at a freshly observed market price.

    Raises:
        LedgerValidationError: If the price is not positive.
    """
    if price <= 0:
        raise LedgerValidationError(f"Market price must be positive: {price}")
    return replace(
        investment,
        current_market_price=price,
        value=investment.quantity * price,
        performance=compute_performance(investment.buy_price, price),
    )


def liquidate_position(
    investment: Investment,
    units_sold: Decimal,
    sell_price: Decimal,
) -> tuple[Investment, Decimal]:
    """Sell part of a position and shrink its cost basis proportionally.

    Args:
        investment: Position being sold.
        units_sold: Units to sell, at most the units held.
        sell_price: Price obtained per unit.

    Returns:
        tuple[Investment, Decimal]: Remaining position and gross proceeds.

    Raises:
        LedgerValidationError: If units or price are out of range.
    """
    if units_sold <= 0:
        raise LedgerValidationError("Units sold must be positive")
    if units_sold > investment.quantity:
        raise LedgerValidationError(
            f"Cannot sell {units_sold} units of {investment.name}; "
            f"only {investment.quantity} held"
        )
    if sell_price < 0:
        raise LedgerValidationError("Sell price cannot be negative")
    remaining = investment.quantity - units_sold
    unit_value = investment.current_market_price or sell_price
    updated = replace(
        investment,
        quantity=remaining,
        initial_investment=(
            investment.initial_investment - units_sold * investment.buy_price
        ),
        value=remaining * unit_value,
    )
    return updated, units_sold * sell_price


def projected_annual_yield(investment: Investment) -> Decimal:
    """Estimate a year of income from the position's yield rate."""
    rate = investment.yield_rate or _ZERO
    if investment.yield_period == YieldPeriod.MONTHLY:
        rate = rate * 12
    return investment.value * rate / _HUNDRED


__all__ = [
    "compute_performance",
    "open_position",
    "mark_to_market",
    "liquidate_position",
    "projected_annual_yield",
]
