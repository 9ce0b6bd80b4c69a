"""Tests for the composition root."""

from decimal import Decimal
from pathlib import Path
from unittest.mock import MagicMock

from finanza.application.use_cases.snapshot_sync import SyncStatus
from finanza.domain.models import AccountType, Currency
from finanza.infrastructure import container
from finanza.infrastructure.asset_price_provider import ChainedAssetPriceProvider
from finanza.infrastructure.settings import LedgerSettings
from finanza.infrastructure.snapshot_repository import (
    JsonFileSnapshotRepository,
    SqlAlchemySnapshotRepository,
)


def _settings(tmp_path: Path, backend: str = "json") -> LedgerSettings:
    return LedgerSettings(
        user_id="ana",
        storage_backend=backend,
        snapshot_file=tmp_path / "snapshot.json",
    )


def test_remote_repository_only_for_sqlalchemy_backend(tmp_path: Path) -> None:
    db_port = MagicMock()

    assert container.build_remote_repository(_settings(tmp_path), db_port) is None
    remote = container.build_remote_repository(
        _settings(tmp_path, "sqlalchemy"),
        db_port,
    )
    assert isinstance(remote, SqlAlchemySnapshotRepository)


def test_local_repository_uses_configured_file(tmp_path: Path) -> None:
    repository = container.build_local_repository(_settings(tmp_path))

    assert isinstance(repository, JsonFileSnapshotRepository)


def test_asset_price_provider_is_a_chain(tmp_path: Path) -> None:
    provider = container.build_asset_price_provider(_settings(tmp_path))

    assert isinstance(provider, ChainedAssetPriceProvider)


def test_ledger_session_persists_changes_locally(tmp_path: Path) -> None:
    """Mutations flow from the store to the local JSON file."""
    settings = _settings(tmp_path)
    store, sync = container.build_ledger_session(settings)

    store.open_account("Caja", AccountType.CASH, Currency.USD, Decimal("25"))

    assert sync.status == SyncStatus.LOCAL_ONLY
    reloaded, _ = container.build_ledger_session(settings)
    assert [a.name for a in reloaded.accounts] == ["Caja"]
    assert reloaded.accounts[0].balance == Decimal("25")


def test_purge_use_case_covers_local_and_remote(tmp_path: Path) -> None:
    settings = _settings(tmp_path, "sqlalchemy")
    purge = container.build_purge_use_case(settings, MagicMock())

    assert len(purge._repositories) == 2
