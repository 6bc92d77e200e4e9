"""Authoritative store of the player's asset records.

The ledger owns one ordered collection per category plus the cash record,
folds them into an ``AggregateSnapshot`` on demand and persists both the
records and a denormalized breakdown for external readers.
"""

import time
from collections.abc import Callable
from decimal import Decimal, InvalidOperation
from typing import Any

from empire_ledger.application.ports.clock import ClockPort
from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.application.stores.events import ChangeNotifier, StoreChange
from empire_ledger.application.stores.ownership_registry import OwnershipRegistry
from empire_ledger.application.stores.reset_flags import ResetFlags
from empire_ledger.domain.constants import (
    ASSET_TRACKER_STORAGE_KEY,
    DEFAULT_STARTING_CASH,
    LEDGER_STORAGE_KEYS,
    MARKET_PRICES_STORAGE_KEY,
    NET_WORTH_BREAKDOWN_STORAGE_KEY,
)
from empire_ledger.domain.errors import LookupMiss, PersistenceError
from empire_ledger.domain.models.records import (
    COLLECTION_CATEGORIES,
    AssetCategory,
    AssetRecord,
    CashBalance,
    CryptoHolding,
    StockHolding,
    category_of,
    parse_amount,
    record_from_payload,
    record_to_payload,
    with_fields,
)
from empire_ledger.domain.models.snapshot import AggregateSnapshot, NetWorthBreakdown
from empire_ledger.domain.services.aggregation import (
    compute_aggregate_snapshot,
    default_snapshot,
)
from empire_ledger.domain.services.market_hours import is_market_open
from empire_ledger.infrastructure.logging.logger import get_app_logger
from empire_ledger.utils.decimal_utils import decimal_to_str


PRICE_LOOKUP_ORDER = (
    (AssetCategory.STOCK, "current_price"),
    (AssetCategory.CRYPTO, "current_price"),
    (AssetCategory.OTHER_INVESTMENT, "current_value"),
    (AssetCategory.PROPERTY, "current_value"),
)


class AssetLedger:
    """Single source of truth for asset records and net worth totals."""

    name = "ledger"

    def __init__(
        self,
        storage: KeyValueStoragePort,
        registry: OwnershipRegistry,
        clock: ClockPort,
        starting_cash: Decimal = DEFAULT_STARTING_CASH,
        flags: ResetFlags | None = None,
        logger=None,
        time_source: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the ledger in its starting state.

        Args:
            storage: Persistent key/value storage.
            registry: Ownership registry consulted during recomputes.
            clock: Clock used for market-hours decisions.
            starting_cash: Cash of a fresh game.
            flags: Reset markers; loading is skipped during a reset.
            logger: Optional logger compatible with logging.Logger-like API.
            time_source: Wall clock in seconds, used for version stamps.
        """
        self._storage = storage
        self._registry = registry
        self._clock = clock
        self._starting_cash = starting_cash
        self._flags = flags
        self._logger = logger or get_app_logger()
        self._time_source = time_source
        self._notifier: ChangeNotifier[StoreChange] = ChangeNotifier(self._logger)
        self._cash = CashBalance(amount=starting_cash)
        self._collections: dict[AssetCategory, list[AssetRecord]] = {
            category: [] for category in COLLECTION_CATEGORIES
        }
        self._market_prices: dict[str, Decimal] = {}
        self._version = 0
        self._snapshot = default_snapshot(starting_cash)

    @property
    def starting_cash(self) -> Decimal:
        return self._starting_cash

    @property
    def cash(self) -> Decimal:
        return self._cash.amount

    @property
    def version(self) -> int:
        return self._snapshot.version

    def storage_keys(self) -> tuple[str, ...]:
        return LEDGER_STORAGE_KEYS

    def subscribe(self, callback: Callable[[StoreChange], None]) -> Callable[[], None]:
        """Register a change listener; returns the unsubscribe function."""
        return self._notifier.subscribe(callback)

    def records(self, category: AssetCategory | str) -> tuple[AssetRecord, ...]:
        category = self._resolve_category(category)
        if category is None:
            return ()
        if category is AssetCategory.CASH:
            return (self._cash,)
        return tuple(self._collections[category])

    def count(self, category: AssetCategory | str) -> int:
        return len(self.records(category))

    def counts(self) -> dict[str, int]:
        return {
            category.value: len(self._collections[category])
            for category in COLLECTION_CATEGORIES
        }

    def add_record(self, record: AssetRecord) -> AssetRecord | None:
        """Add a record, merging it into an existing one with the same id.

        Args:
            record: Any ledger record type.

        Returns:
            AssetRecord | None: The stored record, or None when rejected.
        """
        try:
            category = category_of(record)
        except TypeError as exc:
            self._logger.warning(f"Rejected record: {exc}")
            return None

        if category is AssetCategory.CASH:
            self._cash = self._cash.merged_with(record)
            stored: AssetRecord = self._cash
        else:
            collection = self._collections[category]
            index = self._index_of(category, record.id)
            if index is None:
                collection.append(record)
                stored = record
            else:
                stored = collection[index].merged_with(record)
                collection[index] = stored

        self._changed("add", category, stored.id)
        return stored

    def update_record(
        self,
        category: AssetCategory | str,
        record_id: str,
        **changes: Any,
    ) -> AssetRecord | None:
        """Replace fields of an existing record.

        Unknown ids and unknown fields are logged and ignored.

        Returns:
            AssetRecord | None: The updated record, or None when nothing changed.
        """
        category = self._resolve_category(category)
        if category is None:
            return None
        if category is AssetCategory.CASH:
            current: AssetRecord | None = self._cash
            index = None
        else:
            index = self._index_of(category, record_id)
            current = None if index is None else self._collections[category][index]
        if current is None:
            self._logger.warning(
                f"Cannot update unknown {category.value} record {record_id}"
            )
            return None

        try:
            updated = with_fields(current, changes)
        except KeyError as exc:
            self._logger.warning(
                f"Unknown fields for {category.value} record {record_id}: {exc}"
            )
            return None

        if category is AssetCategory.CASH:
            self._cash = updated
        else:
            self._collections[category][index] = updated
        self._changed("update", category, record_id)
        return updated

    def remove_record(self, category: AssetCategory | str, record_id: str) -> bool:
        category = self._resolve_category(category)
        if category is None:
            return False
        index = None
        if category is not AssetCategory.CASH:
            index = self._index_of(category, record_id)
        if index is None:
            self._logger.warning(
                f"Cannot remove unknown {category.value} record {record_id}"
            )
            return False
        del self._collections[category][index]
        self._changed("remove", category, record_id)
        return True

    def set_cash(self, amount) -> None:
        """Overwrite the cash record."""
        self._cash = CashBalance(amount=amount)
        self._changed("set_cash", AssetCategory.CASH, self._cash.id)

    def update_stock_price(
        self,
        stock_id: str,
        shares,
        price,
        market_open: bool | None = None,
    ) -> StockHolding | None:
        """Update a stock holding, honouring market hours.

        While the market is closed only the share count changes.
        """
        return self._update_priced(
            AssetCategory.STOCK,
            stock_id,
            "shares",
            shares,
            price,
            market_open,
        )

    def update_crypto_price(
        self,
        crypto_id: str,
        amount,
        price,
        market_open: bool | None = None,
    ) -> CryptoHolding | None:
        """Update a crypto holding, honouring market hours."""
        return self._update_priced(
            AssetCategory.CRYPTO,
            crypto_id,
            "amount",
            amount,
            price,
            market_open,
        )

    def set_market_price(self, asset_id: str, price) -> None:
        """Record an explicit market price consulted first by lookups."""
        self._market_prices[asset_id] = parse_amount(price)
        self._persist_market_prices()

    def get_asset_price(self, asset_id: str) -> Decimal:
        """Return the unit price of an asset.

        Sources are tried in order: the market price table, then stocks,
        crypto, other investments, and properties.

        Returns:
            Decimal: The price, or zero when no source knows the id.
        """
        price = self._market_prices.get(asset_id)
        if price is not None and price.is_finite():
            return price
        for category, field_name in PRICE_LOOKUP_ORDER:
            index = self._index_of(category, asset_id)
            if index is not None:
                value = getattr(self._collections[category][index], field_name)
                if value.is_finite():
                    return value
        miss = LookupMiss(f"No price found for asset {asset_id}", {"id": asset_id})
        self._logger.warning(miss.message)
        return Decimal("0")

    def recalculate_totals(self) -> AggregateSnapshot:
        """Fold every record into a fresh snapshot and persist it.

        Returns:
            AggregateSnapshot: The new snapshot; its version is strictly
            greater than the previous one.
        """
        try:
            ownership = self._registry.get_total_ownership_value()
        except Exception as exc:
            self._logger.error(f"Ownership valuation failed, using 0: {exc}")
            ownership = Decimal("0")

        snapshot = compute_aggregate_snapshot(
            self._cash,
            self._collections,
            ownership,
            version=self._next_version(),
            logger=self._logger,
        )
        self._snapshot = snapshot
        self._persist()
        self._logger.debug(
            f"Recalculated totals v{snapshot.version}: "
            f"net worth {snapshot.total_net_worth}"
        )
        return snapshot

    def get_net_worth_breakdown(self) -> AggregateSnapshot:
        """Return the snapshot of the last recompute without recomputing."""
        return self._snapshot

    def load(self) -> None:
        """Hydrate records, totals, and market prices from storage."""
        if self._flags is not None and self._flags.is_in_progress():
            self._logger.info("Reset in progress, skipping ledger load")
            return

        payload = self._read(ASSET_TRACKER_STORAGE_KEY)
        if not isinstance(payload, dict):
            self._restore_defaults()
        else:
            self._hydrate(payload)

        prices = self._read(MARKET_PRICES_STORAGE_KEY)
        self._market_prices = {}
        if isinstance(prices, dict):
            for asset_id, price in prices.items():
                self._market_prices[str(asset_id)] = parse_amount(price)

    def reset_asset_tracker(self) -> bool:
        """Return the ledger to a fresh game state.

        Collections are emptied, owned keys removed, and the starting cash
        restored and persisted. A failed verification triggers one forced
        clear.

        Returns:
            bool: True when the first verification passed.
        """
        self._clear_state()
        verified = self._verify_reset()
        if not verified:
            self._logger.critical("Ledger reset verification failed, forcing clear")
            self._clear_state()
            if not self._verify_reset():
                self._logger.critical("Ledger still holds residual state after forced clear")
        self._notifier.publish(StoreChange(source=self.name, action="reset"))
        return verified

    def reset(self) -> None:
        self.reset_asset_tracker()

    def _clear_state(self) -> None:
        for category in COLLECTION_CATEGORIES:
            self._collections[category] = []
        self._market_prices = {}
        self._cash = CashBalance(amount=self._starting_cash)
        self._registry.reset()
        for key in LEDGER_STORAGE_KEYS:
            self._remove(key)
        self._snapshot = default_snapshot(
            self._starting_cash,
            version=self._next_version(),
        )
        self._persist()

    def _verify_reset(self) -> bool:
        if any(self._collections[category] for category in COLLECTION_CATEGORIES):
            return False
        if self._cash.amount != self._starting_cash:
            return False
        stored = self._read(ASSET_TRACKER_STORAGE_KEY)
        if isinstance(stored, dict):
            for category in COLLECTION_CATEGORIES:
                if stored.get(category.value):
                    return False
        return self._snapshot.total_net_worth == self._starting_cash

    def _update_priced(
        self,
        category: AssetCategory,
        record_id: str,
        quantity_field: str,
        quantity,
        price,
        market_open: bool | None,
    ):
        index = self._index_of(category, record_id)
        if index is None:
            self._logger.warning(
                f"Cannot update price of unknown {category.value} record {record_id}"
            )
            return None
        if market_open is None:
            market_open = is_market_open(self._clock.now())

        changes: dict[str, Any] = {quantity_field: parse_amount(quantity)}
        if market_open:
            changes["current_price"] = parse_amount(price)
        else:
            self._logger.info(
                f"Market closed, keeping price of {category.value} record {record_id}"
            )
        updated = with_fields(self._collections[category][index], changes)
        self._collections[category][index] = updated
        self._changed("price", category, record_id)
        return updated

    def _hydrate(self, payload: dict[str, Any]) -> None:
        self._cash = CashBalance(
            amount=payload.get("cash", decimal_to_str(self._starting_cash))
        )
        for category in COLLECTION_CATEGORIES:
            items: list[AssetRecord] = []
            for raw in payload.get(category.value) or []:
                if not isinstance(raw, dict):
                    self._logger.warning(f"Skipping malformed {category.value} entry")
                    continue
                try:
                    items.append(record_from_payload(category, raw))
                except (TypeError, ValueError) as exc:
                    self._logger.warning(
                        f"Skipping malformed {category.value} entry: {exc}"
                    )
            self._collections[category] = items

        totals = payload.get("totals")
        try:
            snapshot = AggregateSnapshot.from_payload(totals)
        except (AttributeError, KeyError, TypeError, ValueError, InvalidOperation):
            self.recalculate_totals()
            return
        self._snapshot = snapshot
        self._version = max(self._version, snapshot.version)

    def _restore_defaults(self) -> None:
        for category in COLLECTION_CATEGORIES:
            self._collections[category] = []
        self._cash = CashBalance(amount=self._starting_cash)
        self._snapshot = default_snapshot(self._starting_cash, version=self._version)

    def _resolve_category(
        self,
        category: AssetCategory | str,
    ) -> AssetCategory | None:
        try:
            return AssetCategory(category)
        except ValueError:
            self._logger.warning(f"Unknown asset category {category!r}, ignoring")
            return None

    def _index_of(self, category: AssetCategory, record_id: str) -> int | None:
        for index, record in enumerate(self._collections[category]):
            if record.id == record_id:
                return index
        return None

    def _next_version(self) -> int:
        self._version = max(int(self._time_source() * 1000), self._version + 1)
        return self._version

    def _changed(self, action: str, category: AssetCategory, record_id: str) -> None:
        self._persist()
        self._notifier.publish(
            StoreChange(
                source=self.name,
                action=action,
                category=category.value,
                record_id=record_id,
            )
        )

    def _payload(self) -> dict[str, Any]:
        cash = self._cash.amount
        payload: dict[str, Any] = {
            "cash": decimal_to_str(cash) if cash.is_finite() else None,
        }
        for category in COLLECTION_CATEGORIES:
            payload[category.value] = [
                record_to_payload(record) for record in self._collections[category]
            ]
        payload["totals"] = self._snapshot.to_payload()
        payload["lastUpdated"] = self._snapshot.version
        return payload

    def _persist(self) -> None:
        try:
            self._storage.set(ASSET_TRACKER_STORAGE_KEY, self._payload())
            self._storage.set(
                NET_WORTH_BREAKDOWN_STORAGE_KEY,
                NetWorthBreakdown.from_snapshot(self._snapshot).to_payload(),
            )
        except PersistenceError as exc:
            self._logger.error(f"Failed to persist asset ledger: {exc.message}")

    def _persist_market_prices(self) -> None:
        payload = {
            asset_id: decimal_to_str(price)
            for asset_id, price in self._market_prices.items()
            if price.is_finite()
        }
        try:
            self._storage.set(MARKET_PRICES_STORAGE_KEY, payload)
        except PersistenceError as exc:
            self._logger.error(f"Failed to persist market prices: {exc.message}")

    def _read(self, key: str) -> Any | None:
        try:
            return self._storage.get(key)
        except PersistenceError as exc:
            self._logger.error(f"Failed to read {key}: {exc.message}")
            return None

    def _remove(self, key: str) -> None:
        try:
            self._storage.remove(key)
        except PersistenceError as exc:
            self._logger.error(f"Failed to remove {key}: {exc.message}")


__all__ = ["AssetLedger", "PRICE_LOOKUP_ORDER"]
