"""CLI adapter to revalue ticker-backed investments."""

from finanza.application.use_cases.refresh_exchange_rate import (
    RefreshExchangeRateUseCase,
)
from finanza.application.use_cases.update_market_prices import (
    UpdateMarketPricesUseCase,
)
from finanza.infrastructure.container import (
    build_asset_price_provider,
    build_exchange_rate_provider,
    build_ledger_session,
)
from finanza.infrastructure.logging.logger import get_app_logger
from finanza.infrastructure.settings import LedgerSettings


def main() -> None:
    """Fetch prices for every ticker and persist the revalued positions."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    store, sync = build_ledger_session(settings)

    rate = RefreshExchangeRateUseCase(
        build_exchange_rate_provider(settings),
        logger=logger,
        default_rate=settings.default_rate,
    ).execute().rate
    updated = UpdateMarketPricesUseCase(
        store,
        build_asset_price_provider(settings),
        logger=logger,
    ).execute(rate)
    status = sync.flush()

    print(f"Updated {len(updated)} positions (sync: {status.value}).")


if __name__ == "__main__":  # pragma: no cover
    main()
