"""Domain model for investment positions."""

from dataclasses import dataclass
from decimal import Decimal

from finanza.domain.models.enums import (
    Currency,
    InvestmentCategory,
    YieldPeriod,
)


@dataclass(frozen=True)
class Investment:
    """A priced asset position or an informal loan/receivable.

    Attributes:
        id: Unique investment identifier.
        name: Display name.
        initial_investment: Remaining cost basis.
        quantity: Units held.
        buy_price: Cost per unit.
        current_market_price: Latest known unit price.
        value: Mark-to-market value in ``currency``.
        currency: Position currency.
        performance: Price change versus ``buy_price`` in percent.
        category: Asset class.
        ticker: Market symbol for priced assets.
        broker_id: Broker account that funded the position.
        yield_rate: Income rate in percent for yield-bearing positions.
        yield_period: Period of ``yield_rate``.
        date: Opening date formatted as YYYY-MM-DD.
    """

    id: str
    name: str
    initial_investment: Decimal
    quantity: Decimal
    buy_price: Decimal
    current_market_price: Decimal
    value: Decimal
    currency: Currency
    performance: Decimal = Decimal("0")
    category: InvestmentCategory = InvestmentCategory.STOCKS
    ticker: str | None = None
    broker_id: str | None = None
    yield_rate: Decimal | None = None
    yield_period: YieldPeriod | None = None
    date: str | None = None

    @property
    def is_closed(self) -> bool:
        """Return True once every unit has been sold."""
        return self.quantity <= 0


__all__ = ["Investment"]
