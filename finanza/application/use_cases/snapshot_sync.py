"""Background persistence of ledger snapshots.

Every change is written to the local repository right away. Remote saves are
debounced and go through a single in-flight slot: while one save runs, newer
snapshots wait and only the latest is saved once the slot frees up.
"""

import threading
from collections.abc import Callable
from enum import Enum

from finanza.application.ports.snapshot_repository import SnapshotRepositoryPort
from finanza.domain.errors import SnapshotStorageError
from finanza.domain.models import EntitySnapshot
from finanza.infrastructure.logging.logger import get_app_logger

DEFAULT_DEBOUNCE_SECONDS = 1.5


class SyncStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SAVING = "saving"
    SAVED = "saved"
    LOCAL_ONLY = "local_only"


class SnapshotSyncService:
    """Persist snapshots locally at once and remotely after a quiet period."""

    def __init__(
        self,
        user_id: str,
        local: SnapshotRepositoryPort | None = None,
        remote: SnapshotRepositoryPort | None = None,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
        logger=None,
    ) -> None:
        """Initialize the service.

        Args:
            user_id: Key under which snapshots are stored.
            local: Repository written synchronously on every change.
            remote: Repository written after the debounce delay.
            debounce_seconds: Quiet period before a remote save starts.
            timer_factory: Callable with the ``threading.Timer`` signature.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._user_id = user_id
        self._local = local
        self._remote = remote
        self._debounce = debounce_seconds
        self._timer_factory = timer_factory
        self._logger = logger or get_app_logger()
        self._lock = threading.Lock()
        self._timer = None
        self._pending: EntitySnapshot | None = None
        self._last_persisted: EntitySnapshot | None = None
        self._in_flight = False
        self._status = SyncStatus.IDLE if remote else SyncStatus.LOCAL_ONLY

    @property
    def status(self) -> SyncStatus:
        return self._status

    def mark_persisted(self, snapshot: EntitySnapshot) -> None:
        """Record ``snapshot`` as already stored remotely, e.g. after a load."""
        with self._lock:
            self._last_persisted = snapshot

    def notify(self, snapshot: EntitySnapshot) -> None:
        """Accept a new snapshot from the ledger store."""
        self._save_local(snapshot)
        if self._remote is None:
            self._status = SyncStatus.LOCAL_ONLY
            return
        with self._lock:
            self._pending = snapshot
            if not self._in_flight:
                self._status = SyncStatus.PENDING
            if self._timer is not None:
                self._timer.cancel()
            self._timer = self._timer_factory(self._debounce, self._drain)
            self._timer.daemon = True
            self._timer.start()

    __call__ = notify

    def flush(self) -> SyncStatus:
        """Cancel the debounce and save any pending snapshot now."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self._drain()
        return self._status

    def close(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _save_local(self, snapshot: EntitySnapshot) -> None:
        if self._local is None:
            return
        try:
            self._local.save(self._user_id, snapshot)
        except SnapshotStorageError as exc:
            self._logger.error(f"Local snapshot save failed: {exc}")

    def _drain(self) -> None:
        with self._lock:
            if self._in_flight:
                return
            self._in_flight = True
        try:
            while True:
                with self._lock:
                    snapshot = self._pending
                    self._pending = None
                    if snapshot is None:
                        # Cleared under the lock that saw the empty queue.
                        self._in_flight = False
                        return
                    if snapshot == self._last_persisted:
                        self._status = SyncStatus.SAVED
                        continue
                    self._status = SyncStatus.SAVING
                saved = self._save_remote(snapshot)
                with self._lock:
                    if saved:
                        self._last_persisted = snapshot
                    if self._pending is None:
                        self._status = (
                            SyncStatus.SAVED if saved else SyncStatus.LOCAL_ONLY
                        )
        except BaseException:
            with self._lock:
                self._in_flight = False
            raise

    def _save_remote(self, snapshot: EntitySnapshot) -> bool:
        try:
            self._remote.save(self._user_id, snapshot)
        except SnapshotStorageError as exc:
            self._logger.error(f"Remote snapshot save failed: {exc}")
            return False
        self._logger.info(f"Remote snapshot saved for {self._user_id}")
        return True


__all__ = ["SnapshotSyncService", "SyncStatus", "DEFAULT_DEBOUNCE_SECONDS"]
