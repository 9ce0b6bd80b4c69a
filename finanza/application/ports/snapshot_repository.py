"""Port for loading and saving full entity snapshots."""

from typing import Protocol

from finanza.domain.models import EntitySnapshot


class SnapshotRepositoryPort(Protocol):
    """Port exposing whole-snapshot persistence for a user.

    Implementations raise ``SnapshotStorageError`` when the backing store
    fails.
    """

    def load(self, user_id: str) -> EntitySnapshot | None:
        """Return the last saved snapshot, or None when nothing is stored."""

    def save(self, user_id: str, snapshot: EntitySnapshot) -> None:
        """Persist the full snapshot, replacing any previous one."""

    def delete(self, user_id: str) -> bool:
        """Remove the stored snapshot and return False if none existed."""


__all__ = ["SnapshotRepositoryPort"]
