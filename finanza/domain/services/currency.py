"""Currency normalization between USD and VES.

A single shared rate expresses how many VES buy one USD. Nothing is rounded
here; display code decides precision.
"""

from decimal import Decimal

from finanza.domain.models.enums import Currency
from finanza.utils.decimal_utils import coerce_decimal


def _checked_rate(rate) -> Decimal:
    value = coerce_decimal(rate)
    if value <= 0:
        raise ValueError(f"Exchange rate must be positive: {rate}")
    return value


def to_usd(amount: Decimal, currency: Currency, rate) -> Decimal:
    """Express an amount in USD.

    Args:
        amount: Amount in ``currency``.
        currency: Currency of the amount.
        rate: VES per USD.

    Returns:
        Decimal: Amount in USD.
    """
    if currency == Currency.USD:
        return amount
    return amount / _checked_rate(rate)


def to_ves(amount: Decimal, currency: Currency, rate) -> Decimal:
    """Express an amount in VES.

    Args:
        amount: Amount in ``currency``.
        currency: Currency of the amount.
        rate: VES per USD.

    Returns:
        Decimal: Amount in VES.
    """
    if currency == Currency.VES:
        return amount
    return amount * _checked_rate(rate)


def convert(
    amount: Decimal,
    from_currency: Currency,
    to_currency: Currency,
    rate,
) -> Decimal:
    """Convert an amount between the two supported currencies."""
    if from_currency == to_currency:
        return amount
    if to_currency == Currency.USD:
        return to_usd(amount, from_currency, rate)
    return to_ves(amount, from_currency, rate)


__all__ = ["to_usd", "to_ves", "convert"]
