"""Asset records tracked by the ledger.

Every category has its own frozen record type; together they form a closed
union (``AssetRecord``). Numeric fields are normalized to ``Decimal`` on
construction. Values that cannot be parsed become ``Decimal("NaN")`` so the
recompute pass can coerce and report them.
"""

from dataclasses import MISSING, dataclass, fields, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Union

from empire_ledger.utils.decimal_utils import coerce_decimal, decimal_to_str


NAN = Decimal("NaN")
CASH_RECORD_ID = "cash"


class AssetCategory(str, Enum):
    """Ledger categories, one ordered collection each."""

    CASH = "cash"
    STOCK = "stocks"
    CRYPTO = "cryptoAssets"
    BOND = "bonds"
    OTHER_INVESTMENT = "otherInvestments"
    PROPERTY = "properties"
    LIFESTYLE = "lifestyleItems"


def parse_amount(value) -> Decimal:
    """Parse a raw numeric value, mapping garbage to NaN."""
    if value is None:
        return NAN
    try:
        return coerce_decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return NAN


class _RecordMixin:
    """Shared numeric normalization and serialization."""

    NUMERIC_FIELDS: tuple[str, ...] = ()
    MERGE_FIELDS: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for name in self.NUMERIC_FIELDS:
            object.__setattr__(self, name, parse_amount(getattr(self, name)))

    def merged_with(self, other):
        """Return a copy with the merge fields of ``other`` summed in."""
        changes = {
            name: getattr(self, name) + getattr(other, name)
            for name in self.MERGE_FIELDS
        }
        return replace(self, **changes)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if isinstance(value, Decimal):
                value = decimal_to_str(value) if value.is_finite() else None
            payload[_camel(item.name)] = value
        return payload


@dataclass(frozen=True)
class CashBalance(_RecordMixin):
    """Spendable cash held in the ledger."""

    amount: Decimal
    id: str = CASH_RECORD_ID
    name: str = "Cash"

    NUMERIC_FIELDS = ("amount",)
    MERGE_FIELDS = ("amount",)


@dataclass(frozen=True)
class StockHolding(_RecordMixin):
    """Shares of a listed company."""

    id: str
    name: str
    shares: Decimal
    purchase_price: Decimal
    current_price: Decimal

    NUMERIC_FIELDS = ("shares", "purchase_price", "current_price")
    MERGE_FIELDS = ("shares",)

    @property
    def total_value(self) -> Decimal:
        return self.shares * self.current_price


@dataclass(frozen=True)
class CryptoHolding(_RecordMixin):
    """Units of a crypto asset."""

    id: str
    name: str
    amount: Decimal
    current_price: Decimal
    purchase_price: Decimal = Decimal("0")

    NUMERIC_FIELDS = ("amount", "current_price", "purchase_price")
    MERGE_FIELDS = ("amount",)

    @property
    def total_value(self) -> Decimal:
        return self.amount * self.current_price


@dataclass(frozen=True)
class BondHolding(_RecordMixin):
    """Bond position valued with a linear model.

    When ``total_value`` is not given it defaults to
    ``amount * purchase_price``.
    """

    id: str
    name: str
    amount: Decimal
    maturity_value: Decimal
    maturity_date: str | None = None
    purchase_price: Decimal = Decimal("0")
    total_value: Decimal | None = None

    NUMERIC_FIELDS = ("amount", "maturity_value", "purchase_price")
    MERGE_FIELDS = ("amount", "total_value")

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.total_value is None:
            total = self.amount * self.purchase_price
        else:
            total = parse_amount(self.total_value)
        object.__setattr__(self, "total_value", total)


@dataclass(frozen=True)
class OtherInvestment(_RecordMixin):
    """Investment valued by its current value only."""

    id: str
    name: str
    current_value: Decimal
    amount: Decimal = Decimal("1")
    purchase_price: Decimal = Decimal("0")

    NUMERIC_FIELDS = ("current_value", "amount", "purchase_price")
    MERGE_FIELDS = ("amount", "current_value")


@dataclass(frozen=True)
class PropertyHolding(_RecordMixin):
    """Real estate with an optional mortgage."""

    id: str
    name: str
    current_value: Decimal
    mortgage: Decimal = Decimal("0")
    purchase_price: Decimal = Decimal("0")

    NUMERIC_FIELDS = ("current_value", "mortgage", "purchase_price")
    MERGE_FIELDS = ("current_value", "mortgage")

    @property
    def equity(self) -> Decimal:
        return self.current_value - self.mortgage

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        equity = self.equity
        payload["equity"] = decimal_to_str(equity) if equity.is_finite() else None
        return payload


@dataclass(frozen=True)
class LifestyleItem(_RecordMixin):
    """Lifestyle purchase (cars, yachts, jets...)."""

    id: str
    name: str
    current_value: Decimal
    category: str = "general"
    purchase_price: Decimal = Decimal("0")
    purchase_date: str | None = None

    NUMERIC_FIELDS = ("current_value", "purchase_price")
    MERGE_FIELDS = ("current_value",)


AssetRecord = Union[
    CashBalance,
    StockHolding,
    CryptoHolding,
    BondHolding,
    OtherInvestment,
    PropertyHolding,
    LifestyleItem,
]

RECORD_TYPES: dict[AssetCategory, type] = {
    AssetCategory.CASH: CashBalance,
    AssetCategory.STOCK: StockHolding,
    AssetCategory.CRYPTO: CryptoHolding,
    AssetCategory.BOND: BondHolding,
    AssetCategory.OTHER_INVESTMENT: OtherInvestment,
    AssetCategory.PROPERTY: PropertyHolding,
    AssetCategory.LIFESTYLE: LifestyleItem,
}

COLLECTION_CATEGORIES = tuple(
    category for category in AssetCategory if category is not AssetCategory.CASH
)


def category_of(record: AssetRecord) -> AssetCategory:
    """Return the category owning the record type.

    Raises:
        TypeError: If the object is not one of the ledger record types.
    """
    for category, record_type in RECORD_TYPES.items():
        if type(record) is record_type:
            return category
    raise TypeError(f"Unsupported asset record type: {type(record).__name__}")


def record_to_payload(record: AssetRecord) -> dict[str, Any]:
    """Serialize a record into a camelCase JSON-compatible dict."""
    return record.to_payload()


def record_from_payload(
    category: AssetCategory,
    payload: dict[str, Any],
) -> AssetRecord:
    """Build a record from a camelCase payload.

    Unknown keys are ignored. Missing numeric keys become NaN and are
    reported by the next recompute.

    Raises:
        ValueError: If the payload has no usable id.
    """
    record_type = RECORD_TYPES[category]
    kwargs: dict[str, Any] = {}
    for item in fields(record_type):
        key = _camel(item.name)
        if key in payload:
            kwargs[item.name] = payload[key]
        elif item.name in record_type.NUMERIC_FIELDS and not _has_default(item):
            kwargs[item.name] = None
    if category is AssetCategory.CASH:
        kwargs.setdefault("amount", None)
        return record_type(**kwargs)
    if not kwargs.get("id"):
        raise ValueError(f"Record payload for {category.value} has no id")
    kwargs.setdefault("name", str(kwargs["id"]))
    return record_type(**kwargs)


def with_fields(record: AssetRecord, changes: dict[str, Any]) -> AssetRecord:
    """Return a copy of the record with the given attributes replaced.

    Raises:
        KeyError: If a field does not exist on the record type.
    """
    known = {item.name for item in fields(record)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise KeyError(", ".join(unknown))
    return replace(record, **changes)


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


def _has_default(item) -> bool:
    return item.default is not MISSING or item.default_factory is not MISSING


__all__ = [
    "AssetCategory",
    "AssetRecord",
    "BondHolding",
    "CASH_RECORD_ID",
    "COLLECTION_CATEGORIES",
    "CashBalance",
    "CryptoHolding",
    "LifestyleItem",
    "OtherInvestment",
    "PropertyHolding",
    "RECORD_TYPES",
    "StockHolding",
    "category_of",
    "parse_amount",
    "record_from_payload",
    "record_to_payload",
    "with_fields",
]
