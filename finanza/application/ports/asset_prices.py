"""Port for market price lookups."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol


@dataclass(frozen=True)
class AssetQuote:
    """Latest USD price of a ticker."""

    name: str
    price: Decimal
    source: str
    symbol: str


class AssetPricePort(Protocol):
    """Port exposing ticker price lookups."""

    def lookup(self, ticker: str) -> AssetQuote | None:
        """Return a quote, None when unknown, or raise AssetLookupError."""


__all__ = ["AssetQuote", "AssetPricePort"]
