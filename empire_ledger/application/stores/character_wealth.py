"""Character profile facade exposing the player's spendable cash."""

from collections.abc import Callable
from decimal import Decimal
from typing import Any

from empire_ledger.application.ports.storage import KeyValueStoragePort
from empire_ledger.application.stores.events import ChangeNotifier, StoreChange
from empire_ledger.domain.constants import CHARACTER_STORAGE_KEY, DEFAULT_STARTING_CASH
from empire_ledger.domain.errors import PersistenceError
from empire_ledger.domain.models.records import parse_amount
from empire_ledger.infrastructure.logging.logger import get_app_logger
from empire_ledger.utils.decimal_utils import decimal_to_str


class CharacterWealthFacade:
    """Sole writer of the character's wealth.

    Purchases and sales go through ``update_cash``; the refresh pipeline
    copies the value into the ledger and realigns it when the two drift.
    Profile fields other than ``wealth`` are preserved untouched.
    """

    name = "character"

    def __init__(
        self,
        storage: KeyValueStoragePort,
        starting_cash: Decimal = DEFAULT_STARTING_CASH,
        logger=None,
    ) -> None:
        self._storage = storage
        self._starting_cash = starting_cash
        self._logger = logger or get_app_logger()
        self._notifier: ChangeNotifier[StoreChange] = ChangeNotifier(self._logger)
        self._wealth = starting_cash
        self._profile: dict[str, Any] = {}

    @property
    def wealth(self) -> Decimal:
        return self._wealth

    def storage_keys(self) -> tuple[str, ...]:
        return (CHARACTER_STORAGE_KEY,)

    def subscribe(self, callback: Callable[[StoreChange], None]) -> Callable[[], None]:
        """Register a change listener; returns the unsubscribe function."""
        return self._notifier.subscribe(callback)

    def update_cash(self, delta) -> Decimal:
        """Apply a signed cash change.

        Args:
            delta: Amount to add (negative for spending).

        Returns:
            Decimal: The wealth after the change. Non-finite deltas are
            ignored with a warning.
        """
        amount = parse_amount(delta)
        if not amount.is_finite():
            self._logger.warning(f"Ignoring non-finite cash change: {delta!r}")
            return self._wealth
        self._wealth += amount
        self._changed("update_cash")
        return self._wealth

    def set_wealth(self, value) -> Decimal:
        """Overwrite the wealth, used when realigning with the ledger."""
        amount = parse_amount(value)
        if not amount.is_finite():
            self._logger.warning(f"Ignoring non-finite wealth: {value!r}")
            return self._wealth
        self._wealth = amount
        self._changed("set_wealth")
        return self._wealth

    def reset(self, starting: Decimal | None = None) -> None:
        """Restore the starting wealth and drop the stored profile."""
        self._wealth = self._starting_cash if starting is None else starting
        self._profile = {}
        self._changed("reset")

    def load(self) -> None:
        """Read the stored profile; missing or invalid data keeps defaults."""
        try:
            payload = self._storage.get(CHARACTER_STORAGE_KEY)
        except PersistenceError as exc:
            self._logger.error(f"Failed to read character profile: {exc.message}")
            return
        if not isinstance(payload, dict):
            return
        wealth = parse_amount(payload.get("wealth"))
        if wealth.is_finite():
            self._wealth = wealth
        else:
            self._logger.warning("Stored character wealth is invalid, keeping current value")
        self._profile = {key: value for key, value in payload.items() if key != "wealth"}

    def _changed(self, action: str) -> None:
        payload = dict(self._profile)
        payload["wealth"] = decimal_to_str(self._wealth)
        try:
            self._storage.set(CHARACTER_STORAGE_KEY, payload)
        except PersistenceError as exc:
            self._logger.error(f"Failed to persist character profile: {exc.message}")
        self._notifier.publish(StoreChange(source=self.name, action=action))


__all__ = ["CharacterWealthFacade"]
