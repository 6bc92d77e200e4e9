"""Tests for snapshot serialization."""

from decimal import Decimal

import pytest

from empire_ledger.domain.models.snapshot import AggregateSnapshot, NetWorthBreakdown


def test_snapshot_payload_round_trip() -> None:
    """A stored snapshot payload should rebuild the same snapshot."""
    snapshot = AggregateSnapshot(
        total_cash=Decimal("10000"),
        total_property_value=Decimal("500000"),
        total_property_debt=Decimal("400000"),
        total_property_equity=Decimal("100000"),
        total_net_worth=Decimal("110000"),
        wealth_tier="saver",
        version=42,
    )

    payload = snapshot.to_payload()

    assert payload["totalPropertyEquity"] == "100000"
    assert payload["version"] == 42
    assert AggregateSnapshot.from_payload(payload) == snapshot


def test_snapshot_from_payload_requires_cash() -> None:
    """Payloads without a cash total are rejected."""
    with pytest.raises(KeyError):
        AggregateSnapshot.from_payload({"totalNetWorth": "1"})


def test_same_totals_ignores_version() -> None:
    """Two recomputes of the same records differ only by version."""
    first = AggregateSnapshot(total_cash=Decimal("1"), total_net_worth=Decimal("1"), version=1)
    second = AggregateSnapshot(total_cash=Decimal("1"), total_net_worth=Decimal("1"), version=2)

    assert first.same_totals(second)
    assert first != second


def test_breakdown_uses_external_field_names() -> None:
    """The breakdown cache should expose the denormalized names."""
    snapshot = AggregateSnapshot(
        total_cash=Decimal("5"),
        total_lifestyle_value=Decimal("3"),
        total_net_worth=Decimal("8"),
        version=9,
    )

    payload = NetWorthBreakdown.from_snapshot(snapshot).to_payload()

    assert payload["cash"] == "5"
    assert payload["lifestyleItems"] == "3"
    assert payload["total"] == "8"
    assert payload["wealthTier"] == "beginner"
    assert payload["version"] == 9
