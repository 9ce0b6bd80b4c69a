"""Use case to revalue ticker-backed investments."""

from decimal import Decimal

from finanza.application.ports.asset_prices import AssetPricePort
from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.domain.errors import AssetLookupError
from finanza.domain.models import Currency
from finanza.domain.services.currency import convert
from finanza.infrastructure.logging.logger import get_app_logger


class UpdateMarketPricesUseCase:
    """Look up every distinct ticker once and mark positions to market.

    Quotes are in USD. Positions held in VES are converted with ``rate``
    and skipped when no rate is given. A ticker that fails is logged and
    skipped without stopping the others.
    """

    def __init__(
        self,
        store: LedgerStore,
        price_port: AssetPricePort,
        logger=None,
    ) -> None:
        self._store = store
        self._price_port = price_port
        self._logger = logger or get_app_logger()

    def execute(self, rate=None) -> dict[str, Decimal]:
        """Update prices and return the new price per investment id."""
        quotes: dict[str, Decimal | None] = {}
        updated: dict[str, Decimal] = {}
        for investment in self._store.investments:
            if not investment.ticker:
                continue
            symbol = investment.ticker.strip().upper()
            if symbol not in quotes:
                quotes[symbol] = self._lookup(symbol)
            usd_price = quotes[symbol]
            if usd_price is None:
                continue
            if investment.currency == Currency.USD:
                price = usd_price
            elif rate is None:
                self._logger.info(
                    f"Skipping {investment.name}: no rate for "
                    f"{investment.currency.value} conversion"
                )
                continue
            else:
                price = convert(usd_price, Currency.USD, investment.currency, rate)
            self._store.update_investment_price(investment.id, price)
            updated[investment.id] = price
        self._logger.info(
            f"Market prices updated: tickers={len(quotes)}, "
            f"positions={len(updated)}"
        )
        return updated

    def _lookup(self, symbol: str) -> Decimal | None:
        try:
            quote = self._price_port.lookup(symbol)
        except AssetLookupError as exc:
            self._logger.warning(f"Price lookup failed for {symbol}: {exc}")
            return None
        if quote is None:
            self._logger.info(f"No quote found for {symbol}")
            return None
        return quote.price


__all__ = ["UpdateMarketPricesUseCase"]
