"""Application use cases package."""

from .ledger_store import LedgerStore, ChangeListener
from .get_net_worth_summary import GetNetWorthSummaryUseCase
from .get_budget_overview import GetBudgetOverviewUseCase
from .get_pool_balances import GetCustodySummaryUseCase, GetWorkPoolUseCase
from .get_credit_overview import GetCreditOverviewUseCase
from .get_monthly_flow import GetMonthlyFlowUseCase
from .refresh_exchange_rate import RefreshExchangeRateUseCase
from .update_market_prices import UpdateMarketPricesUseCase
from .load_snapshot import LoadSnapshotUseCase, LoadedSnapshot
from .purge_snapshot import PurgeResult, PurgeSnapshotUseCase, legacy_keys
from .snapshot_sync import SnapshotSyncService, SyncStatus

__all__ = [
    "LedgerStore",
    "ChangeListener",
    "GetNetWorthSummaryUseCase",
    "GetBudgetOverviewUseCase",
    "GetCustodySummaryUseCase",
    "GetWorkPoolUseCase",
    "GetCreditOverviewUseCase",
    "GetMonthlyFlowUseCase",
    "RefreshExchangeRateUseCase",
    "UpdateMarketPricesUseCase",
    "LoadSnapshotUseCase",
    "LoadedSnapshot",
    "PurgeSnapshotUseCase",
    "PurgeResult",
    "legacy_keys",
    "SnapshotSyncService",
    "SyncStatus",
]
