"""Session markers describing a complete reset."""

import time
from collections.abc import Callable

from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.domain.constants import (
    RESET_COMPLETED_FLAG,
    RESET_IN_PROGRESS_FLAG,
    RESET_TIMESTAMP_FLAG,
)
from empire_ledger.domain.errors import PersistenceError
from empire_ledger.infrastructure.logging.logger import get_app_logger


class ResetFlags:
    """Read and write the reset markers held in session storage.

    The markers live in short-lived storage, separate from the game keys, so
    clearing game storage never erases them mid-reset.
    """

    def __init__(
        self,
        storage: KeyValueStoragePort,
        logger=None,
        time_source: Callable[[], float] = time.time,
    ) -> None:
        self._storage = storage
        self._logger = logger or get_app_logger()
        self._time_source = time_source

    def mark_in_progress(self) -> None:
        self._write(RESET_IN_PROGRESS_FLAG, True)
        self._remove(RESET_COMPLETED_FLAG)

    def is_in_progress(self) -> bool:
        return bool(self._read(RESET_IN_PROGRESS_FLAG))

    def mark_completed(self) -> float:
        """Clear the in-progress marker and record completion.

        Returns:
            float: Completion timestamp in seconds.
        """
        timestamp = self._time_source()
        self._remove(RESET_IN_PROGRESS_FLAG)
        self._write(RESET_COMPLETED_FLAG, True)
        self._write(RESET_TIMESTAMP_FLAG, timestamp)
        return timestamp

    def is_completed(self) -> bool:
        return bool(self._read(RESET_COMPLETED_FLAG))

    def consume_completed(self) -> bool:
        """Return whether a reset just completed, clearing the marker."""
        completed = self.is_completed()
        if completed:
            self._remove(RESET_COMPLETED_FLAG)
        return completed

    def clear(self) -> None:
        for key in (RESET_IN_PROGRESS_FLAG, RESET_COMPLETED_FLAG, RESET_TIMESTAMP_FLAG):
            self._remove(key)

    def _read(self, key: str):
        try:
            return self._storage.get(key)
        except PersistenceError as exc:
            self._logger.error(f"Failed to read reset flag {key}: {exc.message}")
            return None

    def _write(self, key: str, value) -> None:
        try:
            self._storage.set(key, value)
        except PersistenceError as exc:
            self._logger.error(f"Failed to write reset flag {key}: {exc.message}")

    def _remove(self, key: str) -> None:
        try:
            self._storage.remove(key)
        except PersistenceError as exc:
            self._logger.error(f"Failed to remove reset flag {key}: {exc.message}")


__all__ = ["ResetFlags"]
