"""Tests for the notifier, reset flags, game clock, and keyed state stores."""

from datetime import datetime
from unittest.mock import MagicMock

import pytest

from empire_ledger.application.stores.events import ChangeNotifier, StoreChange
from empire_ledger.application.stores.game_clock import DEFAULT_GAME_START, GameClock
from empire_ledger.application.stores.keyed_state_store import KeyedStateStore
from empire_ledger.application.stores.reset_flags import ResetFlags
from empire_ledger.domain.constants import (
    RESET_COMPLETED_FLAG,
    RESET_IN_PROGRESS_FLAG,
    RESET_TIMESTAMP_FLAG,
    TIME_STORAGE_KEY,
)
from empire_ledger.infrastructure.storage import InMemoryKeyValueStorage


def test_reset_flags_track_progress_and_completion() -> None:
    """Completion clears the in-progress marker and records a timestamp."""
    storage = InMemoryKeyValueStorage()
    flags = ResetFlags(storage, logger=MagicMock(), time_source=lambda: 123.0)

    flags.mark_in_progress()
    assert flags.is_in_progress() is True
    assert storage.get(RESET_IN_PROGRESS_FLAG) is True

    assert flags.mark_completed() == 123.0
    assert flags.is_in_progress() is False
    assert storage.get(RESET_TIMESTAMP_FLAG) == 123.0


def test_consume_completed_returns_true_once() -> None:
    """The completed marker should be observed a single time."""
    storage = InMemoryKeyValueStorage()
    flags = ResetFlags(storage, logger=MagicMock())
    flags.mark_completed()

    assert flags.consume_completed() is True
    assert flags.consume_completed() is False
    assert not storage.contains(RESET_COMPLETED_FLAG)


def test_game_clock_advances_and_resets() -> None:
    """The clock should persist advances and return to its start."""
    storage = InMemoryKeyValueStorage()
    clock = GameClock(storage, logger=MagicMock())

    clock.advance(hours=5)

    assert clock.now() == datetime(2024, 1, 1, 14, 0)
    assert storage.get(TIME_STORAGE_KEY) == {"currentTime": "2024-01-01T14:00:00"}

    clock.reset()
    assert clock.now() == DEFAULT_GAME_START


def test_game_clock_load_ignores_invalid_time() -> None:
    """Invalid stored times keep the current value with a warning."""
    storage = InMemoryKeyValueStorage({TIME_STORAGE_KEY: {"currentTime": "yesterday"}})
    logger = MagicMock()
    clock = GameClock(storage, logger=logger)

    clock.load()

    assert clock.now() == DEFAULT_GAME_START
    logger.warning.assert_called_once()


def test_game_clock_load_restores_time() -> None:
    """A stored ISO timestamp should become the current game time."""
    storage = InMemoryKeyValueStorage(
        {TIME_STORAGE_KEY: {"currentTime": "2025-03-04T10:30:00"}}
    )
    clock = GameClock(storage, logger=MagicMock())

    clock.load()

    assert clock.now() == datetime(2025, 3, 4, 10, 30)


def test_keyed_state_store_resets_to_default_copy() -> None:
    """Reset should write a fresh copy of the default payload."""
    storage = InMemoryKeyValueStorage()
    default = {"activeEvents": []}
    store = KeyedStateStore("events", "events-key", default, storage=storage, logger=MagicMock())
    store.set({"activeEvents": ["flood"]})
    assert store.is_default() is False

    store.reset()

    assert store.get() == {"activeEvents": []}
    assert store.is_default() is True
    assert default == {"activeEvents": []}


def test_keyed_state_store_requires_storage() -> None:
    """Stores cannot be built without a backend."""
    with pytest.raises(ValueError):
        KeyedStateStore("economy", "economy-key")


def test_notifier_skips_failing_subscriber_and_unsubscribes() -> None:
    """A raising subscriber is logged; the others still receive the event."""
    logger = MagicMock()
    notifier = ChangeNotifier(logger)
    received = []

    def _boom(event):
        raise RuntimeError("boom")

    notifier.subscribe(_boom)
    unsubscribe = notifier.subscribe(received.append)
    event = StoreChange(source="ledger", action="add", category="stocks")

    notifier.publish(event)
    unsubscribe()
    unsubscribe()
    notifier.publish(event)

    assert received == [event]
    logger.error.assert_called()


def test_game_clock_set_time_persists_moment() -> None:
    storage = InMemoryKeyValueStorage()
    clock = GameClock(storage, logger=MagicMock())
    moment = datetime(2024, 3, 8, 15, 30)

    clock.set_time(moment)

    assert clock.now() == moment
    assert storage.get(TIME_STORAGE_KEY) == {"currentTime": moment.isoformat()}
