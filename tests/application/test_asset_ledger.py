"""Tests for the AssetLedger store."""

from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace
from unittest.mock import MagicMock

from empire_ledger.application.stores.asset_ledger import AssetLedger
from empire_ledger.application.stores.events import StoreChange
from empire_ledger.application.stores.ownership_registry import OwnershipRegistry
from empire_ledger.application.stores.reset_flags import ResetFlags
from empire_ledger.domain.constants import (
    ASSET_TRACKER_STORAGE_KEY,
    HORSE_RACING_STORAGE_KEY,
    MARKET_PRICES_STORAGE_KEY,
    NET_WORTH_BREAKDOWN_STORAGE_KEY,
)
from empire_ledger.domain.errors import PersistenceError
from empire_ledger.domain.models.records import (
    AssetCategory,
    CashBalance,
    CryptoHolding,
    OtherInvestment,
    PropertyHolding,
    StockHolding,
)
from empire_ledger.infrastructure.storage import InMemoryKeyValueStorage


WEDNESDAY_MORNING = datetime(2024, 1, 3, 10, 0)
SATURDAY_NOON = datetime(2024, 1, 6, 12, 0)


def _build_ledger(storage=None, moment=WEDNESDAY_MORNING, logger=None, flags=None):
    """Create a ledger over in-memory storage with a fixed clock."""
    storage = storage if storage is not None else InMemoryKeyValueStorage()
    logger = logger or MagicMock()
    registry = OwnershipRegistry(storage, logger=logger)
    ledger = AssetLedger(
        storage,
        registry,
        SimpleNamespace(now=lambda: moment),
        starting_cash=Decimal("10000"),
        flags=flags,
        logger=logger,
        time_source=lambda: 1.0,
    )
    return ledger, storage, logger


def test_new_ledger_holds_starting_cash_only() -> None:
    """A fresh ledger should be worth exactly its starting cash."""
    ledger, _, _ = _build_ledger()

    snapshot = ledger.get_net_worth_breakdown()

    assert ledger.cash == Decimal("10000")
    assert snapshot.total_net_worth == Decimal("10000")
    assert all(count == 0 for count in ledger.counts().values())


def test_property_scenario_adds_equity_only() -> None:
    """A 500k property with a 400k mortgage adds 100k of net worth."""
    ledger, _, _ = _build_ledger()
    ledger.add_record(
        PropertyHolding("villa", "Villa", current_value=500000, mortgage=400000)
    )

    snapshot = ledger.recalculate_totals()

    assert snapshot.total_property_equity == Decimal("100000")
    assert snapshot.total_net_worth == Decimal("110000")


def test_add_record_merges_by_id() -> None:
    """Adding an existing id should sum the quantity fields."""
    ledger, _, _ = _build_ledger()
    ledger.add_record(StockHolding("acme", "Acme", 10, 5, 7))

    merged = ledger.add_record(StockHolding("acme", "Acme", 5, 6, 8))

    assert ledger.count(AssetCategory.STOCK) == 1
    assert merged.shares == Decimal("15")
    assert ledger.records("stocks")[0].current_price == Decimal("7")


def test_add_cash_record_increases_cash() -> None:
    """Cash additions should merge into the single cash record."""
    ledger, _, _ = _build_ledger()

    ledger.add_record(CashBalance(amount=250))

    assert ledger.cash == Decimal("10250")


def test_add_record_rejects_unknown_types() -> None:
    """Objects that are not ledger records should be rejected with a warning."""
    ledger, _, logger = _build_ledger()

    assert ledger.add_record(object()) is None
    logger.warning.assert_called_once()


def test_update_record_replaces_fields() -> None:
    """Updates should replace the given fields of the matching record."""
    ledger, _, _ = _build_ledger()
    ledger.add_record(OtherInvestment("art", "Art", 700))

    updated = ledger.update_record("otherInvestments", "art", current_value=900)

    assert updated.current_value == Decimal("900")
    assert ledger.records(AssetCategory.OTHER_INVESTMENT) == (updated,)


def test_update_record_ignores_unknown_id_and_fields() -> None:
    """Unknown ids and fields should be logged and leave records untouched."""
    ledger, _, logger = _build_ledger()
    ledger.add_record(OtherInvestment("art", "Art", 700))

    assert ledger.update_record("otherInvestments", "missing", current_value=1) is None
    assert ledger.update_record("otherInvestments", "art", colour="blue") is None
    assert ledger.records("otherInvestments")[0].current_value == Decimal("700")
    assert logger.warning.call_count == 2


def test_update_cash_record_through_update_record() -> None:
    """The cash record can be updated like any other record."""
    ledger, _, _ = _build_ledger()

    ledger.update_record(AssetCategory.CASH, "cash", amount=5)

    assert ledger.cash == Decimal("5")


def test_remove_record_drops_matching_record() -> None:
    """Removing a known id deletes it; unknown ids return False."""
    ledger, _, _ = _build_ledger()
    ledger.add_record(CryptoHolding("btc", "Bitcoin", 1, 40000))

    assert ledger.remove_record("cryptoAssets", "btc") is True
    assert ledger.remove_record("cryptoAssets", "btc") is False
    assert ledger.count("cryptoAssets") == 0


def test_stock_price_update_keeps_price_when_market_closed() -> None:
    """A closed market should change the share count only."""
    ledger, _, _ = _build_ledger()
    ledger.add_record(StockHolding("acme", "Acme", 10, 5, 7))

    updated = ledger.update_stock_price("acme", 12, 99, market_open=False)

    assert updated.shares == Decimal("12")
    assert updated.current_price == Decimal("7")


def test_stock_price_update_changes_both_when_market_open() -> None:
    """An open market should change both shares and price."""
    ledger, _, _ = _build_ledger()
    ledger.add_record(StockHolding("acme", "Acme", 10, 5, 7))

    updated = ledger.update_stock_price("acme", 12, 99, market_open=True)

    assert updated.shares == Decimal("12")
    assert updated.current_price == Decimal("99")


def test_crypto_price_update_consults_clock_when_not_told() -> None:
    """Without an explicit flag the ledger should ask its clock."""
    ledger, _, _ = _build_ledger(moment=SATURDAY_NOON)
    ledger.add_record(CryptoHolding("btc", "Bitcoin", 1, 40000))

    updated = ledger.update_crypto_price("btc", 2, 50000)

    assert updated.amount == Decimal("2")
    assert updated.current_price == Decimal("40000")


def test_price_update_for_unknown_id_is_ignored() -> None:
    """Updating a missing holding should log and return None."""
    ledger, _, logger = _build_ledger()

    assert ledger.update_stock_price("ghost", 1, 1, market_open=True) is None
    logger.warning.assert_called_once()


def test_get_asset_price_checks_sources_in_order() -> None:
    """Market prices win, then stocks, crypto, investments, properties."""
    ledger, _, _ = _build_ledger()
    ledger.add_record(StockHolding("acme", "Acme", 1, 1, 20))
    ledger.add_record(CryptoHolding("btc", "Bitcoin", 1, 40000))
    ledger.add_record(OtherInvestment("art", "Art", 700))
    ledger.add_record(PropertyHolding("villa", "Villa", current_value=500000))
    ledger.set_market_price("acme", "21.5")

    assert ledger.get_asset_price("acme") == Decimal("21.5")
    assert ledger.get_asset_price("btc") == Decimal("40000")
    assert ledger.get_asset_price("art") == Decimal("700")
    assert ledger.get_asset_price("villa") == Decimal("500000")


def test_get_asset_price_returns_zero_on_miss() -> None:
    """Unknown ids price at zero with a warning."""
    ledger, _, logger = _build_ledger()

    assert ledger.get_asset_price("ghost") == Decimal("0")
    assert "ghost" in logger.warning.call_args[0][0]


def test_recalculate_includes_ownership_value() -> None:
    """Horses in storage should be part of the net worth."""
    storage = InMemoryKeyValueStorage(
        {
            HORSE_RACING_STORAGE_KEY: [
                {"id": "h1", "name": "Thunder", "price": 175000, "earnings": 20000},
                {"id": "h2", "name": "Lightning", "price": 120000, "earnings": 0},
            ]
        }
    )
    ledger, _, _ = _build_ledger(storage=storage)

    snapshot = ledger.recalculate_totals()

    assert snapshot.total_ownership_value == Decimal("305000")
    assert snapshot.total_net_worth == Decimal("315000")


def test_recalculate_versions_strictly_increase() -> None:
    """Every recompute should stamp a larger version."""
    ledger, _, _ = _build_ledger()

    first = ledger.recalculate_totals()
    second = ledger.recalculate_totals()

    assert second.version > first.version
    assert first.same_totals(second)


def test_recalculate_persists_snapshot_and_breakdown() -> None:
    """Totals should be stored with the records and in the breakdown cache."""
    ledger, storage, _ = _build_ledger()
    ledger.add_record(StockHolding("acme", "Acme", 10, 5, 7))

    snapshot = ledger.recalculate_totals()

    stored = storage.get(ASSET_TRACKER_STORAGE_KEY)
    breakdown = storage.get(NET_WORTH_BREAKDOWN_STORAGE_KEY)
    assert stored["stocks"][0]["id"] == "acme"
    assert stored["totals"]["totalStocks"] == "70"
    assert stored["lastUpdated"] == snapshot.version
    assert breakdown["stocks"] == "70"
    assert breakdown["total"] == "10070"


def test_load_restores_records_and_totals() -> None:
    """A second ledger over the same storage should see the same state."""
    ledger, storage, _ = _build_ledger()
    ledger.add_record(StockHolding("acme", "Acme", 10, 5, 7))
    ledger.set_market_price("acme", 8)
    snapshot = ledger.recalculate_totals()

    restored, _, _ = _build_ledger(storage=storage)
    restored.load()

    assert restored.records("stocks") == ledger.records("stocks")
    assert restored.get_net_worth_breakdown() == snapshot
    assert restored.get_asset_price("acme") == Decimal("8")


def test_load_skips_malformed_entries() -> None:
    """Broken entries should be skipped, the rest loaded."""
    storage = InMemoryKeyValueStorage(
        {
            ASSET_TRACKER_STORAGE_KEY: {
                "cash": "500",
                "stocks": [
                    {"shares": 1},
                    "garbage",
                    {"id": "acme", "shares": 2, "purchasePrice": 1, "currentPrice": 3},
                ],
            }
        }
    )
    ledger, _, logger = _build_ledger(storage=storage)

    ledger.load()

    assert ledger.count("stocks") == 1
    assert ledger.cash == Decimal("500")
    assert ledger.get_net_worth_breakdown().total_net_worth == Decimal("506")
    assert logger.warning.call_count >= 2


def test_load_falls_back_to_defaults_on_read_failure() -> None:
    """Read failures should leave the ledger in its starting state."""
    storage = MagicMock()
    storage.get.side_effect = PersistenceError("backend down")
    ledger, _, logger = _build_ledger(storage=storage)

    ledger.load()

    assert ledger.cash == Decimal("10000")
    assert all(count == 0 for count in ledger.counts().values())
    logger.error.assert_called()


def test_load_is_skipped_while_reset_in_progress() -> None:
    """Stale storage must not be hydrated mid-reset."""
    storage = InMemoryKeyValueStorage(
        {ASSET_TRACKER_STORAGE_KEY: {"cash": "1", "stocks": []}}
    )
    flags = ResetFlags(InMemoryKeyValueStorage(), logger=MagicMock())
    flags.mark_in_progress()
    ledger, _, _ = _build_ledger(storage=storage, flags=flags)

    ledger.load()

    assert ledger.cash == Decimal("10000")


def test_write_failures_are_logged_not_raised() -> None:
    """Mutations should succeed in memory when storage writes fail."""
    storage = MagicMock()
    storage.set.side_effect = PersistenceError("disk full")
    ledger, _, logger = _build_ledger(storage=storage)

    stored = ledger.add_record(StockHolding("acme", "Acme", 1, 1, 1))

    assert stored is not None
    assert ledger.count("stocks") == 1
    logger.error.assert_called()


def test_reset_asset_tracker_restores_starting_state() -> None:
    """A ledger reset empties collections and restores starting cash."""
    ledger, storage, _ = _build_ledger()
    ledger.add_record(StockHolding("acme", "Acme", 10, 5, 7))
    ledger.add_record(CashBalance(amount=900))
    ledger.set_market_price("acme", 8)
    ledger.recalculate_totals()

    assert ledger.reset_asset_tracker() is True

    assert all(count == 0 for count in ledger.counts().values())
    assert ledger.cash == Decimal("10000")
    assert ledger.get_net_worth_breakdown().total_net_worth == Decimal("10000")
    assert storage.get(ASSET_TRACKER_STORAGE_KEY)["stocks"] == []
    assert not storage.contains(MARKET_PRICES_STORAGE_KEY)


def test_subscribers_receive_change_events() -> None:
    """Each mutation should publish one change until unsubscribed."""
    ledger, _, _ = _build_ledger()
    events = []
    unsubscribe = ledger.subscribe(events.append)

    ledger.add_record(StockHolding("acme", "Acme", 1, 1, 1))
    unsubscribe()
    ledger.remove_record("stocks", "acme")

    assert events == [
        StoreChange(source="ledger", action="add", category="stocks", record_id="acme")
    ]


def test_failing_subscriber_does_not_break_mutation() -> None:
    """Subscriber errors are logged and the mutation still applies."""
    ledger, _, logger = _build_ledger()

    def _boom(_event):
        raise RuntimeError("listener crashed")

    ledger.subscribe(_boom)
    ledger.add_record(StockHolding("acme", "Acme", 1, 1, 1))

    assert ledger.count("stocks") == 1
    logger.error.assert_called_once()


def test_oversized_holding_persists_and_recalculates() -> None:
    """Values beyond the decimal context precision must not break writes."""
    ledger, storage, _ = _build_ledger()

    stored = ledger.add_record(StockHolding("moon", "Moon Corp", 1e308, 1, 1))
    snapshot = ledger.recalculate_totals()

    assert stored is not None
    assert snapshot.total_stocks > Decimal("1e307")
    payload = storage.get(ASSET_TRACKER_STORAGE_KEY)
    assert payload["stocks"][0]["shares"] == "1" + "0" * 308
    assert ledger.add_record(StockHolding("acme", "Acme", 1, 2, 3)) is not None


def test_unknown_category_is_logged_and_ignored() -> None:
    """Unknown category names degrade to warnings and no-ops."""
    ledger, _, logger = _build_ledger()

    assert ledger.update_record("yachts", "x", current_value=1) is None
    assert ledger.remove_record("yachts", "x") is False
    assert ledger.records("yachts") == ()
    assert ledger.count("yachts") == 0
    assert logger.warning.call_count == 4
