"""Tests for the CharacterWealthFacade store."""

from decimal import Decimal
from unittest.mock import MagicMock

from empire_ledger.application.stores.character_wealth import CharacterWealthFacade
from empire_ledger.domain.constants import CHARACTER_STORAGE_KEY
from empire_ledger.domain.errors import PersistenceError
from empire_ledger.infrastructure.storage import InMemoryKeyValueStorage


def _build_facade(data=None):
    storage = InMemoryKeyValueStorage(data or {})
    logger = MagicMock()
    facade = CharacterWealthFacade(storage, starting_cash=Decimal("10000"), logger=logger)
    return facade, storage, logger


def test_update_cash_applies_delta_and_persists() -> None:
    """Spending should lower the wealth and store it."""
    facade, storage, _ = _build_facade()

    assert facade.update_cash(-2500) == Decimal("7500")
    assert storage.get(CHARACTER_STORAGE_KEY) == {"wealth": "7500"}


def test_update_cash_ignores_non_finite_delta() -> None:
    """Garbage deltas should be logged and ignored."""
    facade, _, logger = _build_facade()

    assert facade.update_cash("lots") == Decimal("10000")
    logger.warning.assert_called_once()


def test_set_wealth_overwrites_value() -> None:
    """set_wealth replaces the current value."""
    facade, _, _ = _build_facade()

    facade.set_wealth("1234.56")

    assert facade.wealth == Decimal("1234.56")


def test_load_keeps_other_profile_fields() -> None:
    """Profile fields other than wealth should survive a write."""
    facade, storage, _ = _build_facade(
        {CHARACTER_STORAGE_KEY: {"wealth": "5000", "name": "Ada", "age": 30}}
    )

    facade.load()
    facade.update_cash(100)

    assert facade.wealth == Decimal("5100")
    assert storage.get(CHARACTER_STORAGE_KEY) == {
        "name": "Ada",
        "age": 30,
        "wealth": "5100",
    }


def test_load_keeps_defaults_on_read_failure() -> None:
    """Read errors should leave the starting wealth in place."""
    storage = MagicMock()
    storage.get.side_effect = PersistenceError("backend down")
    logger = MagicMock()
    facade = CharacterWealthFacade(storage, logger=logger)

    facade.load()

    assert facade.wealth == Decimal("10000")
    logger.error.assert_called_once()


def test_reset_restores_starting_wealth_and_notifies() -> None:
    """Reset should restore the starting cash and publish a change."""
    facade, storage, _ = _build_facade(
        {CHARACTER_STORAGE_KEY: {"wealth": "99", "name": "Ada"}}
    )
    facade.load()
    events = []
    facade.subscribe(events.append)

    facade.reset()

    assert facade.wealth == Decimal("10000")
    assert storage.get(CHARACTER_STORAGE_KEY) == {"wealth": "10000"}
    assert [event.action for event in events] == ["reset"]
