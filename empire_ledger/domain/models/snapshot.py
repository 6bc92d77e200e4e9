"""Derived aggregates produced by a ledger recompute."""

from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from empire_ledger.utils.decimal_utils import coerce_decimal, decimal_to_str


@dataclass(frozen=True)
class AggregateSnapshot:
    """Totals folded from the ledger records at the last recompute.

    The snapshot is a cache: it is rebuilt on every recompute and never
    mutated by hand.

    Attributes:
        total_cash: Cash record amount.
        total_stocks: Sum of shares times current price.
        total_crypto: Sum of amount times current price.
        total_bonds: Sum of bond total values.
        total_other_investments: Sum of other investment current values.
        total_property_value: Gross property value.
        total_property_debt: Sum of mortgages.
        total_property_equity: Property value minus debt.
        total_lifestyle_value: Sum of lifestyle item values.
        total_ownership_value: Value of racing teams, horses, franchises.
        total_net_worth: Sum of the eight net worth components.
        wealth_tier: Identifier of the tier matching the net worth.
        version: Monotonic millisecond stamp of the recompute.
    """

    total_cash: Decimal
    total_stocks: Decimal = Decimal("0")
    total_crypto: Decimal = Decimal("0")
    total_bonds: Decimal = Decimal("0")
    total_other_investments: Decimal = Decimal("0")
    total_property_value: Decimal = Decimal("0")
    total_property_debt: Decimal = Decimal("0")
    total_property_equity: Decimal = Decimal("0")
    total_lifestyle_value: Decimal = Decimal("0")
    total_ownership_value: Decimal = Decimal("0")
    total_net_worth: Decimal = Decimal("0")
    wealth_tier: str = "beginner"
    version: int = 0

    def component_sum(self) -> Decimal:
        """Return the sum of the net worth components."""
        return (
            self.total_cash
            + self.total_stocks
            + self.total_crypto
            + self.total_bonds
            + self.total_other_investments
            + self.total_property_equity
            + self.total_lifestyle_value
            + self.total_ownership_value
        )

    def totals(self) -> dict[str, Decimal]:
        """Return every monetary total keyed by attribute name."""
        return {
            name: value
            for name, value in self.__dict__.items()
            if isinstance(value, Decimal)
        }

    def same_totals(self, other: "AggregateSnapshot") -> bool:
        """Compare two snapshots ignoring their version stamps."""
        return replace(self, version=0) == replace(other, version=0)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            _camel(name): decimal_to_str(value)
            for name, value in self.totals().items()
        }
        payload["wealthTier"] = self.wealth_tier
        payload["version"] = self.version
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "AggregateSnapshot":
        """Build a snapshot from a stored payload.

        Raises:
            KeyError: If the cash total is missing.
            decimal.InvalidOperation: If a total is not numeric.
        """
        kwargs: dict[str, Any] = {}
        for name in cls.__dataclass_fields__:
            key = _camel(name)
            if key not in payload:
                continue
            if name == "wealth_tier":
                kwargs[name] = str(payload[key])
            elif name == "version":
                kwargs[name] = int(payload[key])
            else:
                kwargs[name] = coerce_decimal(payload[key])
        if "total_cash" not in kwargs:
            raise KeyError("totalCash")
        return cls(**kwargs)


@dataclass(frozen=True)
class NetWorthBreakdown:
    """Denormalized copy of the snapshot for fast external reads."""

    cash: Decimal
    stocks: Decimal
    crypto: Decimal
    bonds: Decimal
    other_investments: Decimal
    property_equity: Decimal
    property_value: Decimal
    property_debt: Decimal
    lifestyle_items: Decimal
    ownership: Decimal
    total: Decimal
    wealth_tier: str
    version: int

    @classmethod
    def from_snapshot(cls, snapshot: AggregateSnapshot) -> "NetWorthBreakdown":
        return cls(
            cash=snapshot.total_cash,
            stocks=snapshot.total_stocks,
            crypto=snapshot.total_crypto,
            bonds=snapshot.total_bonds,
            other_investments=snapshot.total_other_investments,
            property_equity=snapshot.total_property_equity,
            property_value=snapshot.total_property_value,
            property_debt=snapshot.total_property_debt,
            lifestyle_items=snapshot.total_lifestyle_value,
            ownership=snapshot.total_ownership_value,
            total=snapshot.total_net_worth,
            wealth_tier=snapshot.wealth_tier,
            version=snapshot.version,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for name, value in self.__dict__.items():
            if isinstance(value, Decimal):
                value = decimal_to_str(value)
            payload[_camel(name)] = value
        return payload


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


__all__ = ["AggregateSnapshot", "NetWorthBreakdown"]
