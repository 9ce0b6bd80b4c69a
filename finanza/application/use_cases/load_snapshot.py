"""Use case to load the persisted snapshot of a user."""

from dataclasses import dataclass

from finanza.application.ports.snapshot_repository import SnapshotRepositoryPort
from finanza.domain.errors import SnapshotStorageError
from finanza.domain.models import EntitySnapshot
from finanza.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LoadedSnapshot:
    """Snapshot together with the store it came from.

    Attributes:
        snapshot: Loaded entities.
        source: "remote", "local" or "empty".
    """

    snapshot: EntitySnapshot
    source: str


class LoadSnapshotUseCase:
    """Load remote state, falling back to the local copy, then defaults."""

    def __init__(
        self,
        local: SnapshotRepositoryPort | None = None,
        remote: SnapshotRepositoryPort | None = None,
        logger=None,
    ) -> None:
        self._local = local
        self._remote = remote
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str) -> LoadedSnapshot:
        """Return the first snapshot found for ``user_id``.

        Args:
            user_id: Owner of the stored state.

        Returns:
            LoadedSnapshot: Empty defaults when nothing could be loaded.
        """
        for source, repository in (("remote", self._remote), ("local", self._local)):
            if repository is None:
                continue
            try:
                snapshot = repository.load(user_id)
            except SnapshotStorageError as exc:
                self._logger.warning(f"Could not load {source} snapshot: {exc}")
                continue
            if snapshot is not None:
                self._logger.info(f"Loaded {source} snapshot for {user_id}")
                return LoadedSnapshot(snapshot=snapshot, source=source)
        self._logger.info(f"No stored snapshot for {user_id}, starting empty")
        return LoadedSnapshot(snapshot=EntitySnapshot.empty(), source="empty")


__all__ = ["LoadSnapshotUseCase", "LoadedSnapshot"]
