"""Tests for the exchange rate providers."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from finanza.domain.errors import ExchangeRateUnavailableError
from finanza.infrastructure.exchange_rate_provider import (
    StaticExchangeRateProvider,
    TCambioExchangeRateProvider,
    parse_locale_number,
)

PAGE = """
<div class="rate">Bs.S 0,00</div>
<div class="rate">Bs.S 390,29</div>
<p>Ultima actualización 12/05/2024 09:00 AM</p>
"""


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("390,29", Decimal("390.29")),
        ("1.234,56", Decimal("1234.56")),
        ("1,234.56", Decimal("1234.56")),
        ("36.5", Decimal("36.5")),
        ("", None),
        ("abc", None),
    ],
)
def test_parse_locale_number(raw, expected) -> None:
    assert parse_locale_number(raw) == expected


def test_parse_picks_first_positive_rate_and_date() -> None:
    provider = TCambioExchangeRateProvider(
        url="https://rates.test/",
        fetch=lambda url, timeout: PAGE,
        logger=MagicMock(),
    )

    quote = provider.fetch_rate()

    assert quote.rate == Decimal("390.29")
    assert quote.source_name == "TCambio"
    assert quote.source_url == "https://rates.test/"
    assert quote.source_date_text == "12/05/2024 09:00 AM"


def test_parse_without_rate_raises() -> None:
    provider = TCambioExchangeRateProvider(logger=MagicMock())

    with pytest.raises(ExchangeRateUnavailableError):
        provider.parse("<html>mantenimiento</html>")


def test_fetch_error_is_wrapped() -> None:
    """Network failures become ExchangeRateUnavailableError."""

    def failing_fetch(url, timeout):
        raise TimeoutError("timed out")

    provider = TCambioExchangeRateProvider(fetch=failing_fetch, logger=MagicMock())

    with pytest.raises(ExchangeRateUnavailableError):
        provider.fetch_rate()


def test_static_provider() -> None:
    quote = StaticExchangeRateProvider(Decimal("40")).fetch_rate()

    assert quote.rate == Decimal("40")
    assert quote.source_name == "manual"
    with pytest.raises(ValueError):
        StaticExchangeRateProvider(Decimal("0"))
