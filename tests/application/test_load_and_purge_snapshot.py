"""Tests for loading and purging stored snapshots."""

from unittest.mock import MagicMock

from finanza.application.use_cases.load_snapshot import LoadSnapshotUseCase
from finanza.application.use_cases.purge_snapshot import (
    PurgeSnapshotUseCase,
    legacy_keys,
)
from finanza.domain.errors import SnapshotStorageError
from finanza.domain.models import EntitySnapshot


def test_load_prefers_remote() -> None:
    remote, local = MagicMock(), MagicMock()
    snapshot = EntitySnapshot(expense_categories=("Remota",))
    remote.load.return_value = snapshot

    loaded = LoadSnapshotUseCase(local, remote, logger=MagicMock()).execute("u1")

    assert loaded.source == "remote"
    assert loaded.snapshot is snapshot
    local.load.assert_not_called()


def test_load_falls_back_to_local_on_remote_error() -> None:
    remote, local = MagicMock(), MagicMock()
    remote.load.side_effect = SnapshotStorageError("offline")
    local.load.return_value = EntitySnapshot()
    logger = MagicMock()

    loaded = LoadSnapshotUseCase(local, remote, logger=logger).execute("u1")

    assert loaded.source == "local"
    logger.warning.assert_called_once()


def test_load_returns_empty_defaults_when_nothing_stored() -> None:
    local = MagicMock()
    local.load.return_value = None

    loaded = LoadSnapshotUseCase(local, None, logger=MagicMock()).execute("u1")

    assert loaded.source == "empty"
    assert loaded.snapshot == EntitySnapshot.empty()


def test_legacy_keys() -> None:
    assert legacy_keys("u1") == ["u1", "f360_data_u1", "f360_user"]


def test_purge_deletes_every_key_and_reports_failures() -> None:
    """A failing key does not stop the others."""
    repository = MagicMock()

    def delete(key):
        if key == "f360_data_u1":
            raise SnapshotStorageError("locked")
        return key == "u1"

    repository.delete.side_effect = delete

    result = PurgeSnapshotUseCase([repository], logger=MagicMock()).execute("u1")

    assert result.removed == ["u1"]
    assert list(result.failures) == ["f360_data_u1"]
    assert result.ok is False
    assert repository.delete.call_count == 3


def test_purge_missing_keys_is_success() -> None:
    repository = MagicMock()
    repository.delete.return_value = False

    result = PurgeSnapshotUseCase([repository], logger=MagicMock()).execute("u1")

    assert result.ok is True
    assert result.removed == []
