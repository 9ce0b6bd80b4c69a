"""Snapshot repositories backed by SQL and by a local JSON file."""

import json
import os
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from finanza.application.ports.database import DatabaseEnginePort
from finanza.application.ports.snapshot_repository import SnapshotRepositoryPort
from finanza.domain.errors import SnapshotStorageError
from finanza.domain.models import EntitySnapshot
from finanza.infrastructure.logging.logger import get_app_logger
from finanza.infrastructure.snapshot_codec import (
    decode_snapshot,
    dumps_snapshot,
    encode_snapshot,
    json_number,
    loads_snapshot,
)


CREATE_STATE_TABLE_SQL = text(
    """
    CREATE TABLE IF NOT EXISTS finance_user_state (
        user_id VARCHAR(255) PRIMARY KEY,
        payload TEXT NOT NULL,
        updated_at VARCHAR(40) NOT NULL
    )
    """
)

SELECT_STATE_SQL = text(
    """
    SELECT payload
    FROM finance_user_state
    WHERE user_id = :user_id
    """
)

UPSERT_STATE_SQL = text(
    """
    INSERT INTO finance_user_state (user_id, payload, updated_at)
    VALUES (:user_id, :payload, :updated_at)
    ON CONFLICT (user_id) DO UPDATE
    SET payload = excluded.payload,
        updated_at = excluded.updated_at
    """
)

DELETE_STATE_SQL = text(
    """
    DELETE FROM finance_user_state
    WHERE user_id = :user_id
    """
)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _json_default(value):
    if isinstance(value, Decimal):
        return json_number(value)
    raise TypeError(f"Cannot serialize {type(value).__name__}")


class SqlAlchemySnapshotRepository(SnapshotRepositoryPort):
    """Remote snapshot store keeping one JSON payload per user."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the state engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._table_ready = False

    def _ensure_table(self, conn) -> None:
        if not self._table_ready:
            conn.execute(CREATE_STATE_TABLE_SQL)
            self._table_ready = True

    def load(self, user_id: str) -> EntitySnapshot | None:
        """Return the stored snapshot for ``user_id`` or None.

        Raises:
            SnapshotStorageError: If the query fails or the payload is not JSON.
        """
        engine = self._db_port.get_engine()
        try:
            with engine.begin() as conn:
                self._ensure_table(conn)
                row = conn.execute(SELECT_STATE_SQL, {"user_id": user_id}).first()
        except SQLAlchemyError as exc:
            raise SnapshotStorageError(f"Failed to load state: {exc}") from exc
        if row is None:
            return None
        try:
            return loads_snapshot(row.payload, logger=self._logger)
        except ValueError as exc:
            raise SnapshotStorageError(
                f"Stored state for {user_id} is not valid JSON"
            ) from exc

    def save(self, user_id: str, snapshot: EntitySnapshot) -> None:
        """Upsert the full snapshot for ``user_id``."""
        params = {
            "user_id": user_id,
            "payload": dumps_snapshot(snapshot),
            "updated_at": _utc_now(),
        }
        engine = self._db_port.get_engine()
        try:
            with engine.begin() as conn:
                self._ensure_table(conn)
                conn.execute(UPSERT_STATE_SQL, params)
        except SQLAlchemyError as exc:
            raise SnapshotStorageError(f"Failed to save state: {exc}") from exc

    def delete(self, user_id: str) -> bool:
        """Delete the row for ``user_id``; False when no row existed."""
        engine = self._db_port.get_engine()
        try:
            with engine.begin() as conn:
                self._ensure_table(conn)
                result = conn.execute(DELETE_STATE_SQL, {"user_id": user_id})
        except SQLAlchemyError as exc:
            raise SnapshotStorageError(f"Failed to delete state: {exc}") from exc
        return bool(result.rowcount)


class JsonFileSnapshotRepository(SnapshotRepositoryPort):
    """Local snapshot store: one JSON document keyed by user id.

    The file maps each key to a snapshot payload, mirroring per-key device
    storage. Writes go to a temporary file that replaces the original. A file
    that is not valid JSON is renamed to ``<name>.corrupt`` and treated as
    empty.
    """

    def __init__(self, path: Path | str, logger=None) -> None:
        self._path = Path(path)
        self._logger = logger or get_app_logger()

    def _read_all(self) -> dict:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SnapshotStorageError(
                f"Failed to read {self._path}: {exc}"
            ) from exc
        if not raw.strip():
            return {}
        try:
            document = json.loads(raw, parse_float=Decimal)
        except ValueError:
            self._quarantine()
            return {}
        if not isinstance(document, dict):
            self._logger.warning(
                f"Snapshot file {self._path} is not an object, ignoring it"
            )
            return {}
        return document

    def _quarantine(self) -> None:
        """Move an unparseable file aside so the next save starts fresh."""
        corrupt_path = self._path.with_name(self._path.name + ".corrupt")
        try:
            os.replace(self._path, corrupt_path)
        except OSError as exc:
            raise SnapshotStorageError(
                f"Snapshot file {self._path} is not valid JSON and could "
                f"not be moved aside: {exc}"
            ) from exc
        self._logger.warning(
            f"Snapshot file {self._path} is not valid JSON, "
            f"moved to {corrupt_path}"
        )

    def _write_all(self, document: dict) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(
                json.dumps(
                    document,
                    ensure_ascii=False,
                    indent=2,
                    default=_json_default,
                ),
                encoding="utf-8",
            )
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise SnapshotStorageError(
                f"Failed to write {self._path}: {exc}"
            ) from exc

    def load(self, user_id: str) -> EntitySnapshot | None:
        document = self._read_all()
        if user_id not in document:
            return None
        return decode_snapshot(document[user_id], logger=self._logger)

    def save(self, user_id: str, snapshot: EntitySnapshot) -> None:
        document = self._read_all()
        document[user_id] = encode_snapshot(snapshot)
        self._write_all(document)

    def delete(self, user_id: str) -> bool:
        document = self._read_all()
        if user_id not in document:
            return False
        del document[user_id]
        self._write_all(document)
        return True


__all__ = ["SqlAlchemySnapshotRepository", "JsonFileSnapshotRepository"]
