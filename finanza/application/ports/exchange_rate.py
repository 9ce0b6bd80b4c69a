"""Port for the current USD/VES exchange rate."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Protocol


@dataclass(frozen=True)
class ExchangeRateQuote:
    """Exchange rate observed at a source.

    Attributes:
        rate: VES per USD, always positive.
        source_name: Name of the source, "fallback" when defaulted.
        fetched_at: When the rate was obtained.
        source_url: Page the rate was read from, if any.
        source_date_text: Publication date as printed by the source.
    """

    rate: Decimal
    source_name: str
    fetched_at: datetime
    source_url: str | None = None
    source_date_text: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source_name == "fallback"


class ExchangeRatePort(Protocol):
    """Port exposing the latest exchange rate."""

    def fetch_rate(self) -> ExchangeRateQuote:
        """Return the latest rate or raise ExchangeRateUnavailableError."""


__all__ = ["ExchangeRateQuote", "ExchangeRatePort"]
