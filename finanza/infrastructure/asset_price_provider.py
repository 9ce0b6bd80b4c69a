"""Asset price providers backed by public quote endpoints.

Lookups go through Yahoo Finance first, then CoinGecko, then Binance USDT
pairs. Each provider returns None when the ticker is unknown and raises
``AssetLookupError`` when the endpoint fails.
"""

import re
from collections.abc import Callable, Iterable
from decimal import Decimal
from urllib.parse import quote

from finanza.application.ports.asset_prices import AssetPricePort, AssetQuote
from finanza.domain.errors import AssetLookupError
from finanza.infrastructure.http import fetch_json
from finanza.infrastructure.logging.logger import get_app_logger
from finanza.utils.decimal_utils import parse_decimal

YAHOO_QUOTE_URL = "https://query1.finance.yahoo.com/v7/finance/quote?symbols={symbols}"
COINGECKO_SEARCH_URL = "https://api.coingecko.com/api/v3/search?query={query}"
COINGECKO_PRICE_URL = (
    "https://api.coingecko.com/api/v3/simple/price?ids={coin_id}&vs_currencies=usd"
)
BINANCE_PRICE_URL = "https://api.binance.com/api/v3/ticker/price?symbol={symbol}"

TICKER_PATTERN = re.compile(r"^[A-Z0-9.\-_=]{1,20}$")
PLAIN_SYMBOL_PATTERN = re.compile(r"^[A-Z0-9]{2,12}$")

JsonFetcher = Callable[[str, float], object]


def normalize_ticker(ticker: str) -> str:
    """Upper-case a ticker and strip whitespace.

    Raises:
        AssetLookupError: If the result is empty or has unexpected characters.
    """
    symbol = re.sub(r"\s+", "", ticker or "").upper()
    if not symbol or not TICKER_PATTERN.match(symbol):
        raise AssetLookupError(f"Invalid ticker: {ticker!r}")
    return symbol


def _positive(value) -> Decimal | None:
    parsed = parse_decimal(value)
    return parsed if parsed is not None and parsed > 0 else None


class _JsonProvider:
    source = ""

    def __init__(
        self,
        timeout: float = 9.0,
        fetch: JsonFetcher = fetch_json,
        logger=None,
    ) -> None:
        self._timeout = timeout
        self._fetch = fetch
        self._logger = logger or get_app_logger()

    def _get(self, url: str):
        try:
            return self._fetch(url, self._timeout)
        except (OSError, ValueError) as exc:
            raise AssetLookupError(f"{self.source}: {exc}") from exc


class YahooAssetPriceProvider(_JsonProvider, AssetPricePort):
    """Quote lookup against the Yahoo Finance quote endpoint."""

    source = "yahoo"

    def lookup(self, ticker: str) -> AssetQuote | None:
        """Return the best matching quote for ``ticker``.

        Plain symbols are also tried as ``<TICKER>-USD`` to catch crypto
        pairs. The exact symbol wins over the crypto pair, which wins over
        the first result carrying a price.
        """
        symbol = normalize_ticker(ticker)
        candidates = [symbol]
        if "-" not in symbol and PLAIN_SYMBOL_PATTERN.match(symbol):
            candidates.append(f"{symbol}-USD")
        data = self._get(YAHOO_QUOTE_URL.format(symbols=quote(",".join(candidates))))
        response = data.get("quoteResponse") if isinstance(data, dict) else None
        results = response.get("result") if isinstance(response, dict) else None
        if not isinstance(results, list):
            return None
        results = [r for r in results if isinstance(r, dict)]
        if not results:
            return None

        def resolved(item: dict) -> str:
            return str(item.get("symbol") or "").upper()

        def price_of(item: dict) -> Decimal | None:
            for key in ("regularMarketPrice", "postMarketPrice", "preMarketPrice"):
                price = _positive(item.get(key))
                if price is not None:
                    return price
            return None

        pick = (
            next((r for r in results if resolved(r) == symbol), None)
            or next((r for r in results if resolved(r) == f"{symbol}-USD"), None)
            or next((r for r in results if price_of(r) is not None), None)
        )
        if pick is None:
            return None
        price = price_of(pick)
        if price is None:
            return None
        name = (
            pick.get("longName")
            or pick.get("shortName")
            or pick.get("displayName")
            or pick.get("symbol")
            or symbol
        )
        return AssetQuote(
            name=str(name),
            price=price,
            source=self.source,
            symbol=str(pick.get("symbol") or symbol),
        )


class CoinGeckoAssetPriceProvider(_JsonProvider, AssetPricePort):
    """Search a coin by symbol and read its USD price."""

    source = "coingecko"

    def lookup(self, ticker: str) -> AssetQuote | None:
        symbol = normalize_ticker(ticker).lower()
        search = self._get(COINGECKO_SEARCH_URL.format(query=quote(symbol)))
        coins = search.get("coins") if isinstance(search, dict) else None
        coins = [c for c in coins or [] if isinstance(c, dict)]
        if not coins:
            return None
        coin = next(
            (c for c in coins if str(c.get("symbol") or "").lower() == symbol),
            coins[0],
        )
        coin_id = coin.get("id")
        if not coin_id:
            return None
        prices = self._get(COINGECKO_PRICE_URL.format(coin_id=quote(str(coin_id))))
        entry = prices.get(coin_id) if isinstance(prices, dict) else None
        price = _positive(entry.get("usd")) if isinstance(entry, dict) else None
        if price is None:
            return None
        return AssetQuote(
            name=str(coin.get("name") or symbol.upper()),
            price=price,
            source=self.source,
            symbol=str(coin.get("symbol") or symbol).upper(),
        )


class BinanceAssetPriceProvider(_JsonProvider, AssetPricePort):
    """Read the ``<TICKER>USDT`` spot price."""

    source = "binance"

    def lookup(self, ticker: str) -> AssetQuote | None:
        symbol = normalize_ticker(ticker)
        if not PLAIN_SYMBOL_PATTERN.match(symbol):
            return None
        pair = f"{symbol}USDT"
        data = self._get(BINANCE_PRICE_URL.format(symbol=quote(pair)))
        price = _positive(data.get("price")) if isinstance(data, dict) else None
        if price is None:
            return None
        return AssetQuote(
            name=f"{symbol} / USDT",
            price=price,
            source=self.source,
            symbol=pair,
        )


class ChainedAssetPriceProvider(AssetPricePort):
    """Try several providers in order and return the first quote."""

    def __init__(self, providers: Iterable[AssetPricePort], logger=None) -> None:
        self._providers = list(providers)
        self._logger = logger or get_app_logger()

    def lookup(self, ticker: str) -> AssetQuote | None:
        """Return the first quote found.

        Raises:
            AssetLookupError: If every provider failed and none answered.
        """
        normalize_ticker(ticker)
        errors: list[str] = []
        for provider in self._providers:
            try:
                found = provider.lookup(ticker)
            except AssetLookupError as exc:
                self._logger.warning(f"Price provider failed for {ticker}: {exc}")
                errors.append(str(exc))
                continue
            if found is not None:
                return found
        if errors and len(errors) == len(self._providers):
            raise AssetLookupError(
                f"No provider answered for {ticker}: {'; '.join(errors)}"
            )
        return None


__all__ = [
    "normalize_ticker",
    "YahooAssetPriceProvider",
    "CoinGeckoAssetPriceProvider",
    "BinanceAssetPriceProvider",
    "ChainedAssetPriceProvider",
]
