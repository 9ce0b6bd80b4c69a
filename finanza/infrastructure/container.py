"""Composition root for wiring infrastructure adapters."""

from finanza.application.ports.asset_prices import AssetPricePort
from finanza.application.ports.database import DatabaseEnginePort
from finanza.application.ports.exchange_rate import ExchangeRatePort
from finanza.application.ports.snapshot_repository import SnapshotRepositoryPort
from finanza.application.use_cases.ledger_store import LedgerStore
from finanza.application.use_cases.load_snapshot import LoadSnapshotUseCase
from finanza.application.use_cases.purge_snapshot import PurgeSnapshotUseCase
from finanza.application.use_cases.snapshot_sync import SnapshotSyncService
from finanza.infrastructure.asset_price_provider import (
    BinanceAssetPriceProvider,
    ChainedAssetPriceProvider,
    CoinGeckoAssetPriceProvider,
    YahooAssetPriceProvider,
)
from finanza.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from finanza.infrastructure.exchange_rate_provider import (
    TCambioExchangeRateProvider,
)
from finanza.infrastructure.logging.logger import get_app_logger
from finanza.infrastructure.settings import LedgerSettings
from finanza.infrastructure.snapshot_repository import (
    JsonFileSnapshotRepository,
    SqlAlchemySnapshotRepository,
)
from finanza.utils.utils import get_project_root


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_local_repository(
    settings: LedgerSettings | None = None,
) -> SnapshotRepositoryPort:
    """Return the on-device JSON snapshot repository."""
    resolved = settings or LedgerSettings.from_env()
    path = resolved.snapshot_file or (
        get_project_root() / "data" / "snapshot.json"
    )
    return JsonFileSnapshotRepository(
        path,
        logger=get_app_logger(),
    )


def build_remote_repository(
    settings: LedgerSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> SnapshotRepositoryPort | None:
    """Return the remote repository, None when only local storage is used."""
    resolved = settings or LedgerSettings.from_env()
    if resolved.storage_backend != "sqlalchemy":
        return None
    return SqlAlchemySnapshotRepository(
        db_port or build_database_adapter(),
        logger=get_app_logger(),
    )


def build_exchange_rate_provider(
    settings: LedgerSettings | None = None,
) -> ExchangeRatePort:
    """Return the scraping exchange rate provider."""
    resolved = settings or LedgerSettings.from_env()
    return TCambioExchangeRateProvider(
        url=resolved.rate_source_url,
        timeout=resolved.http_timeout,
    )


def build_asset_price_provider(
    settings: LedgerSettings | None = None,
) -> AssetPricePort:
    """Return the Yahoo, CoinGecko, Binance lookup chain."""
    resolved = settings or LedgerSettings.from_env()
    timeout = min(resolved.http_timeout, 9.0)
    return ChainedAssetPriceProvider(
        [
            YahooAssetPriceProvider(timeout=timeout),
            CoinGeckoAssetPriceProvider(timeout=timeout),
            BinanceAssetPriceProvider(timeout=timeout),
        ]
    )


def build_ledger_session(
    settings: LedgerSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> tuple[LedgerStore, SnapshotSyncService]:
    """Load the user's snapshot and return a store wired to the sync service.

    Returns:
        tuple: The ledger store and the sync service persisting its changes.
    """
    resolved = settings or LedgerSettings.from_env()
    local = build_local_repository(resolved)
    remote = build_remote_repository(resolved, db_port)
    loaded = LoadSnapshotUseCase(local=local, remote=remote).execute(
        resolved.user_id
    )
    sync = SnapshotSyncService(
        resolved.user_id,
        local=local,
        remote=remote,
        debounce_seconds=resolved.sync_debounce_seconds,
    )
    if loaded.source == "remote":
        sync.mark_persisted(loaded.snapshot)
    store = LedgerStore(loaded.snapshot, on_change=sync.notify)
    return store, sync


def build_purge_use_case(
    settings: LedgerSettings | None = None,
    db_port: DatabaseEnginePort | None = None,
) -> PurgeSnapshotUseCase:
    """Return a purge use case covering every configured repository."""
    resolved = settings or LedgerSettings.from_env()
    repositories = [build_local_repository(resolved)]
    remote = build_remote_repository(resolved, db_port)
    if remote is not None:
        repositories.append(remote)
    return PurgeSnapshotUseCase(repositories)


__all__ = [
    "build_database_adapter",
    "build_local_repository",
    "build_remote_repository",
    "build_exchange_rate_provider",
    "build_asset_price_provider",
    "build_ledger_session",
    "build_purge_use_case",
]
