"""Exchange rate providers for the USD/VES rate."""

import re
from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

from finanza.application.ports.exchange_rate import (
    ExchangeRatePort,
    ExchangeRateQuote,
)
from finanza.domain.errors import ExchangeRateUnavailableError
from finanza.infrastructure.http import fetch_text
from finanza.infrastructure.logging.logger import get_app_logger
from finanza.infrastructure.settings import DEFAULT_RATE_SOURCE_URL
from finanza.utils.decimal_utils import parse_decimal

RATE_PATTERN = re.compile(r"Bs\.S\s*([0-9]+(?:[.,][0-9]+)*)", re.IGNORECASE)
DATE_PATTERN = re.compile(r"Ultima actualización\s*([^\n<]+)", re.IGNORECASE)


def parse_locale_number(raw: str | None) -> Decimal | None:
    """Parse a number that may use either comma or dot as decimal mark.

    When both separators appear, the last one is the decimal mark. A lone
    comma is a decimal mark; lone dots are kept as decimal points.

    Args:
        raw: Text such as "1.234,56", "1,234.56" or "390,29".

    Returns:
        Decimal | None: Parsed value, None when not a number.
    """
    if not raw:
        return None
    text = re.sub(r"\s", "", str(raw))
    has_comma = "," in text
    has_dot = "." in text
    if has_comma and has_dot:
        if text.rfind(",") > text.rfind("."):
            text = text.replace(".", "").replace(",", ".")
        else:
            text = text.replace(",", "")
    elif has_comma:
        text = text.replace(",", ".", 1)
    return parse_decimal(text)


class TCambioExchangeRateProvider(ExchangeRatePort):
    """Scrape the published Bs.S rate from the TCambio page."""

    source_name = "TCambio"

    def __init__(
        self,
        url: str = DEFAULT_RATE_SOURCE_URL,
        timeout: float = 12.0,
        fetch: Callable[[str, float], str] = fetch_text,
        logger=None,
    ) -> None:
        """Initialize the provider.

        Args:
            url: Page containing the rate.
            timeout: Request timeout in seconds.
            fetch: Callable returning the page body for (url, timeout).
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._url = url
        self._timeout = timeout
        self._fetch = fetch
        self._logger = logger or get_app_logger()

    def fetch_rate(self) -> ExchangeRateQuote:
        try:
            html = self._fetch(self._url, self._timeout)
        except OSError as exc:
            raise ExchangeRateUnavailableError(
                f"Could not reach {self._url}: {exc}"
            ) from exc
        return self.parse(html)

    def parse(self, html: str) -> ExchangeRateQuote:
        """Extract the first positive rate and the publication date.

        Raises:
            ExchangeRateUnavailableError: If no usable rate is present.
        """
        candidates = RATE_PATTERN.findall(html)
        if not candidates:
            raise ExchangeRateUnavailableError("No Bs.S rate found on page")
        rate = next(
            (
                value
                for value in map(parse_locale_number, candidates)
                if value is not None and value > 0
            ),
            None,
        )
        if rate is None:
            raise ExchangeRateUnavailableError("Could not parse the Bs.S rate")
        date_match = DATE_PATTERN.search(html)
        date_text = date_match.group(1).strip() if date_match else None
        self._logger.debug(f"Parsed rate {rate} dated {date_text!r}")
        return ExchangeRateQuote(
            rate=rate,
            source_name=self.source_name,
            fetched_at=datetime.now(timezone.utc),
            source_url=self._url,
            source_date_text=date_text or None,
        )


class StaticExchangeRateProvider(ExchangeRatePort):
    """Return a manually configured rate."""

    def __init__(self, rate: Decimal, source_name: str = "manual") -> None:
        if rate <= 0:
            raise ValueError(f"Exchange rate must be positive: {rate}")
        self._rate = rate
        self._source_name = source_name

    def fetch_rate(self) -> ExchangeRateQuote:
        return ExchangeRateQuote(
            rate=self._rate,
            source_name=self._source_name,
            fetched_at=datetime.now(timezone.utc),
        )


__all__ = [
    "parse_locale_number",
    "TCambioExchangeRateProvider",
    "StaticExchangeRateProvider",
]
