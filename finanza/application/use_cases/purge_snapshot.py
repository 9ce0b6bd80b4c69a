"""Use case to erase every stored copy of a user's data."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from finanza.application.ports.snapshot_repository import SnapshotRepositoryPort
from finanza.domain.errors import SnapshotStorageError
from finanza.infrastructure.logging.logger import get_app_logger


def legacy_keys(user_id: str) -> list[str]:
    """Return every key under which a user's state may have been stored."""
    return [user_id, f"f360_data_{user_id}", "f360_user"]


@dataclass(frozen=True)
class PurgeResult:
    """Outcome of a purge.

    Attributes:
        removed: Keys that held data and were deleted.
        failures: Error message per key that could not be deleted.
    """

    removed: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failures


class PurgeSnapshotUseCase:
    """Delete the user's snapshot under current and legacy keys.

    A missing key counts as success. A failing key is recorded and the
    remaining keys are still attempted.
    """

    def __init__(
        self,
        repositories: Iterable[SnapshotRepositoryPort],
        logger=None,
    ) -> None:
        self._repositories = list(repositories)
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str) -> PurgeResult:
        result = PurgeResult()
        for repository in self._repositories:
            for key in legacy_keys(user_id):
                try:
                    if repository.delete(key):
                        result.removed.append(key)
                except SnapshotStorageError as exc:
                    self._logger.error(f"Failed to purge {key}: {exc}")
                    result.failures[key] = str(exc)
        self._logger.info(
            f"Purge for {user_id}: removed={len(result.removed)}, "
            f"failures={len(result.failures)}"
        )
        return result


__all__ = ["PurgeSnapshotUseCase", "PurgeResult", "legacy_keys"]
