"""In-game clock persisted alongside the other game stores."""

from datetime import datetime, timedelta

from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.domain.constants import TIME_STORAGE_KEY
from empire_ledger.domain.errors import PersistenceError
from empire_ledger.infrastructure.logging.logger import get_app_logger


DEFAULT_GAME_START = datetime(2024, 1, 1, 9, 0)


class GameClock:
    """Game time source implementing ``ClockPort``.

    Market-hours decisions use this clock, so they follow game time rather
    than the host's wall clock.
    """

    name = "time"

    def __init__(
        self,
        storage: KeyValueStoragePort,
        start: datetime = DEFAULT_GAME_START,
        logger=None,
    ) -> None:
        self._storage = storage
        self._start = start
        self._current = start
        self._logger = logger or get_app_logger()

    def now(self) -> datetime:
        return self._current

    def storage_keys(self) -> tuple[str, ...]:
        return (TIME_STORAGE_KEY,)

    def advance(self, hours: float = 1) -> datetime:
        """Move game time forward and persist it."""
        self._current += timedelta(hours=hours)
        self._persist()
        return self._current

    def set_time(self, moment: datetime) -> None:
        self._current = moment
        self._persist()

    def reset(self) -> None:
        self._current = self._start
        self._persist()

    def load(self) -> None:
        try:
            payload = self._storage.get(TIME_STORAGE_KEY)
        except PersistenceError as exc:
            self._logger.error(f"Failed to read game time: {exc.message}")
            return
        if not isinstance(payload, dict) or "currentTime" not in payload:
            return
        try:
            self._current = datetime.fromisoformat(str(payload["currentTime"]))
        except ValueError:
            self._logger.warning(f"Invalid stored game time: {payload['currentTime']!r}")

    def _persist(self) -> None:
        try:
            self._storage.set(
                TIME_STORAGE_KEY,
                {"currentTime": self._current.isoformat()},
            )
        except PersistenceError as exc:
            self._logger.error(f"Failed to persist game time: {exc.message}")


__all__ = ["DEFAULT_GAME_START", "GameClock"]
