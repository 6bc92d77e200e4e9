"""Key/value storage adapters for the game state."""

import copy
import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from empire_ledger.application.ports.database import DatabaseEnginePort
from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.domain.errors import PersistenceError
from empire_ledger.infrastructure.logging.logger import get_app_logger


CREATE_STORAGE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS game_storage (
    storage_key VARCHAR(255) PRIMARY KEY,
    payload TEXT NOT NULL
)
"""

SELECT_VALUE_SQL = text(
    "SELECT payload FROM game_storage WHERE storage_key = :storage_key"
)
SELECT_KEYS_SQL = text("SELECT storage_key FROM game_storage ORDER BY storage_key")
DELETE_VALUE_SQL = text("DELETE FROM game_storage WHERE storage_key = :storage_key")
INSERT_VALUE_SQL = text(
    """
    INSERT INTO game_storage (storage_key, payload)
    VALUES (:storage_key, :payload)
    """
)


class SqlAlchemyKeyValueStorage(KeyValueStoragePort):
    """Game storage backed by a single SQL table of JSON payloads."""

    def __init__(self, db_port: DatabaseEnginePort, logger=None) -> None:
        """Initialize the storage.

        Args:
            db_port: Port providing access to the storage engine.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._db_port = db_port
        self._logger = logger or get_app_logger()
        self._prepared = False

    def prepare(self) -> None:
        """Create the storage table when missing."""
        engine = self._db_port.get_storage_engine()
        try:
            with engine.begin() as conn:
                conn.exec_driver_sql(CREATE_STORAGE_TABLE_SQL)
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to prepare game storage: {exc}") from exc
        self._prepared = True

    def get(self, key: str) -> Any | None:
        self._ensure_prepared()
        engine = self._db_port.get_storage_engine()
        try:
            with engine.connect() as conn:
                raw = conn.execute(SELECT_VALUE_SQL, {"storage_key": key}).scalar()
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to read {key}: {exc}", {"key": key}) from exc
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError as exc:
            raise PersistenceError(
                f"Stored value for {key} is not valid JSON",
                {"key": key},
            ) from exc

    def set(self, key: str, value: Any) -> None:
        self._ensure_prepared()
        try:
            payload = json.dumps(value)
        except (TypeError, ValueError) as exc:
            raise PersistenceError(
                f"Value for {key} is not JSON serializable: {exc}",
                {"key": key},
            ) from exc
        engine = self._db_port.get_storage_engine()
        try:
            with engine.begin() as conn:
                conn.execute(DELETE_VALUE_SQL, {"storage_key": key})
                conn.execute(
                    INSERT_VALUE_SQL,
                    {"storage_key": key, "payload": payload},
                )
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to write {key}: {exc}", {"key": key}) from exc

    def remove(self, key: str) -> None:
        self._ensure_prepared()
        engine = self._db_port.get_storage_engine()
        try:
            with engine.begin() as conn:
                conn.execute(DELETE_VALUE_SQL, {"storage_key": key})
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to remove {key}: {exc}", {"key": key}) from exc

    def contains(self, key: str) -> bool:
        return self.get(key) is not None

    def keys(self) -> list[str]:
        self._ensure_prepared()
        engine = self._db_port.get_storage_engine()
        try:
            with engine.connect() as conn:
                return [row.storage_key for row in conn.execute(SELECT_KEYS_SQL)]
        except SQLAlchemyError as exc:
            raise PersistenceError(f"Failed to list storage keys: {exc}") from exc

    def _ensure_prepared(self) -> None:
        if not self._prepared:
            self.prepare()
            self._logger.debug("Game storage table ready")


class InMemoryKeyValueStorage(KeyValueStoragePort):
    """Process-local storage, used for session flags and tests."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = copy.deepcopy(initial or {})

    def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def contains(self, key: str) -> bool:
        return key in self._data

    def keys(self) -> list[str]:
        return sorted(self._data)


__all__ = ["InMemoryKeyValueStorage", "SqlAlchemyKeyValueStorage"]
