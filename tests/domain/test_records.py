"""Tests for the ledger record types."""

from decimal import Decimal

import pytest

from empire_ledger.domain.models.records import (
    AssetCategory,
    BondHolding,
    CashBalance,
    PropertyHolding,
    StockHolding,
    category_of,
    parse_amount,
    record_from_payload,
    record_to_payload,
    with_fields,
)


def test_numeric_fields_are_normalized_to_decimal() -> None:
    """Numeric strings and floats should be stored as Decimal."""
    stock = StockHolding("acme", "Acme", "10", 12.5, "15")

    assert stock.shares == Decimal("10")
    assert stock.purchase_price == Decimal("12.5")
    assert stock.total_value == Decimal("150")


def test_parse_amount_maps_garbage_to_nan() -> None:
    """Unparseable values should become NaN instead of raising."""
    assert parse_amount("not-a-number").is_nan()
    assert parse_amount(None).is_nan()
    assert parse_amount("3.5") == Decimal("3.5")


def test_merged_with_sums_quantity_and_keeps_price() -> None:
    """Merging two stock lots should add shares only."""
    first = StockHolding("acme", "Acme", 10, 5, 7)
    second = StockHolding("acme", "Acme", 4, 6, 8)

    merged = first.merged_with(second)

    assert merged.shares == Decimal("14")
    assert merged.current_price == Decimal("7")
    assert merged.purchase_price == Decimal("5")


def test_bond_total_value_defaults_to_linear_model() -> None:
    """Bonds without a total value should use amount times purchase price."""
    bond = BondHolding("t10", "Treasury", amount=5, maturity_value=1100, purchase_price=1000)

    assert bond.total_value == Decimal("5000")


def test_property_payload_includes_equity() -> None:
    """Property payloads should expose camelCase fields and equity."""
    house = PropertyHolding("villa", "Villa", current_value=500000, mortgage=400000)

    payload = record_to_payload(house)

    assert payload["currentValue"] == "500000"
    assert payload["mortgage"] == "400000"
    assert payload["equity"] == "100000"
    assert house.equity == Decimal("100000")


def test_record_from_payload_ignores_unknown_keys_and_defaults_name() -> None:
    """Payload parsing should drop unknown keys and reuse the id as name."""
    stock = record_from_payload(
        AssetCategory.STOCK,
        {
            "id": "acme",
            "shares": "3",
            "purchasePrice": "1",
            "currentPrice": "2",
            "colour": "blue",
        },
    )

    assert stock == StockHolding("acme", "acme", 3, 1, 2)


def test_record_from_payload_marks_missing_numbers_as_nan() -> None:
    """Missing required numbers should survive as NaN for the recompute."""
    stock = record_from_payload(AssetCategory.STOCK, {"id": "acme", "shares": 1})

    assert stock.current_price.is_nan()


def test_record_from_payload_requires_id() -> None:
    """Collection records without an id should be rejected."""
    with pytest.raises(ValueError):
        record_from_payload(AssetCategory.STOCK, {"shares": 1})


def test_cash_payload_round_trip() -> None:
    """The cash record should parse without an explicit id."""
    cash = record_from_payload(AssetCategory.CASH, {"amount": "250.5"})

    assert cash == CashBalance(amount=Decimal("250.5"))


def test_with_fields_rejects_unknown_fields() -> None:
    """Updating a field the record does not have should raise KeyError."""
    stock = StockHolding("acme", "Acme", 1, 1, 1)

    with pytest.raises(KeyError):
        with_fields(stock, {"colour": "blue"})


def test_category_of_rejects_foreign_objects() -> None:
    """Only ledger record types map to a category."""
    assert category_of(CashBalance(amount=1)) is AssetCategory.CASH
    with pytest.raises(TypeError):
        category_of(object())
