"""Opaque single-key stores for neighbouring game systems."""

import copy
from typing import Any

from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.domain.errors import PersistenceError
from empire_ledger.infrastructure.logging.logger import get_app_logger


class KeyedStateStore:
    """Store owning one storage key with a known default payload.

    The engine never interprets the payload; it only needs to reset it
    (economy, game progress, random events).
    """

    def __init__(
        self,
        name: str,
        key: str,
        default: dict[str, Any] | None = None,
        storage: KeyValueStoragePort | None = None,
        logger=None,
    ) -> None:
        if storage is None:
            raise ValueError(f"Store {name} requires a storage backend")
        self.name = name
        self._key = key
        self._default = default or {}
        self._storage = storage
        self._logger = logger or get_app_logger()

    @property
    def key(self) -> str:
        return self._key

    def storage_keys(self) -> tuple[str, ...]:
        return (self._key,)

    def get(self) -> dict[str, Any]:
        try:
            value = self._storage.get(self._key)
        except PersistenceError as exc:
            self._logger.error(f"Failed to read {self._key}: {exc.message}")
            value = None
        if not isinstance(value, dict):
            return copy.deepcopy(self._default)
        return value

    def set(self, value: dict[str, Any]) -> None:
        try:
            self._storage.set(self._key, value)
        except PersistenceError as exc:
            self._logger.error(f"Failed to persist {self._key}: {exc.message}")

    def is_default(self) -> bool:
        return self.get() == self._default

    def reset(self) -> None:
        self.set(copy.deepcopy(self._default))


__all__ = ["KeyedStateStore"]
