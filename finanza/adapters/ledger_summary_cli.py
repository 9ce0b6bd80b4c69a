"""CLI adapter printing a summary of the stored ledger.

It loads the configured snapshot, refreshes the exchange rate and prints
net worth, the personal flow of the current month and the pool balances.
"""

from finanza.application.use_cases.get_monthly_flow import GetMonthlyFlowUseCase
from finanza.application.use_cases.get_net_worth_summary import (
    GetNetWorthSummaryUseCase,
)
from finanza.application.use_cases.get_pool_balances import (
    GetCustodySummaryUseCase,
    GetWorkPoolUseCase,
)
from finanza.application.use_cases.refresh_exchange_rate import (
    RefreshExchangeRateUseCase,
)
from finanza.infrastructure.container import (
    build_exchange_rate_provider,
    build_ledger_session,
)
from finanza.infrastructure.logging.logger import get_app_logger
from finanza.infrastructure.settings import LedgerSettings


def main() -> None:
    """Print the ledger summary for the configured user."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    store, sync = build_ledger_session(settings)

    quote = RefreshExchangeRateUseCase(
        build_exchange_rate_provider(settings),
        logger=logger,
        default_rate=settings.default_rate,
    ).execute()
    rate = quote.rate

    net_worth = GetNetWorthSummaryUseCase(store, logger=logger).execute(rate)
    flow = GetMonthlyFlowUseCase(store, logger=logger).execute(rate)
    work = GetWorkPoolUseCase(store, logger=logger).execute(rate)
    custody = GetCustodySummaryUseCase(store, logger=logger).execute(rate)
    sync.close()

    print(f"Rate: {rate} Bs/USD ({quote.source_name})")
    print(f"Net worth: ${net_worth.net_worth:,.2f}")
    print(f"Own funds: ${net_worth.own_funds:,.2f}")
    print(f"Credit debt: ${net_worth.credit_debt_total:,.2f}")
    print(
        f"{flow.month}: income ${flow.income:,.2f}, "
        f"expense ${flow.expense:,.2f}, net ${flow.net:,.2f}"
    )
    print(f"Work pool: ${work.balance:,.2f} ({work.status.value})")
    for owner in custody.owners:
        print(f"Custody {owner.owner}: ${owner.balance:,.2f}")


if __name__ == "__main__":  # pragma: no cover
    main()
