"""Fold ledger records into aggregate totals."""

from collections.abc import Mapping, Sequence
from decimal import Decimal
from logging import Logger

from empire_ledger.domain.models.records import (
    AssetCategory,
    AssetRecord,
    CashBalance,
)
from empire_ledger.domain.models.snapshot import AggregateSnapshot
from empire_ledger.domain.models.wealth import WealthTier
from empire_ledger.domain.services.validation import finite_or_zero
from empire_ledger.domain.services.wealth_tiers import (
    WEALTH_TIERS,
    classify_wealth_tier,
)


def compute_aggregate_snapshot(
    cash: CashBalance,
    collections: Mapping[AssetCategory, Sequence[AssetRecord]],
    ownership_value: Decimal,
    *,
    version: int,
    logger: Logger,
    tiers: Sequence[WealthTier] = WEALTH_TIERS,
) -> AggregateSnapshot:
    """Compute every total from the current records.

    Non-finite or missing numeric fields count as zero and are reported
    through the logger.

    Args:
        cash: Ledger cash record.
        collections: Records per non-cash category.
        ownership_value: Total from the ownership registry.
        version: Version stamp for the new snapshot.
        logger: Logger used for coercion warnings.
        tiers: Wealth tier table used for classification.

    Returns:
        AggregateSnapshot: Freshly computed totals.
    """
    def fold(category: AssetCategory, *field_names: str) -> Decimal:
        total = Decimal("0")
        for record in collections.get(category, ()):
            product = Decimal("1")
            for name in field_names:
                product *= finite_or_zero(
                    getattr(record, name),
                    name,
                    record.id,
                    logger,
                )
            total += product
        return total

    total_cash = finite_or_zero(cash.amount, "amount", cash.id, logger)
    total_stocks = fold(AssetCategory.STOCK, "shares", "current_price")
    total_crypto = fold(AssetCategory.CRYPTO, "amount", "current_price")
    total_bonds = fold(AssetCategory.BOND, "total_value")
    total_other = fold(AssetCategory.OTHER_INVESTMENT, "current_value")
    total_property_value = fold(AssetCategory.PROPERTY, "current_value")
    total_property_debt = fold(AssetCategory.PROPERTY, "mortgage")
    total_property_equity = total_property_value - total_property_debt
    total_lifestyle = fold(AssetCategory.LIFESTYLE, "current_value")
    total_ownership = finite_or_zero(
        ownership_value,
        "ownership_value",
        "ownership",
        logger,
    )

    total_net_worth = (
        total_cash
        + total_stocks
        + total_crypto
        + total_bonds
        + total_other
        + total_property_equity
        + total_lifestyle
        + total_ownership
    )
    tier = classify_wealth_tier(total_net_worth, tiers)

    return AggregateSnapshot(
        total_cash=total_cash,
        total_stocks=total_stocks,
        total_crypto=total_crypto,
        total_bonds=total_bonds,
        total_other_investments=total_other,
        total_property_value=total_property_value,
        total_property_debt=total_property_debt,
        total_property_equity=total_property_equity,
        total_lifestyle_value=total_lifestyle,
        total_ownership_value=total_ownership,
        total_net_worth=total_net_worth,
        wealth_tier=tier.id,
        version=version,
    )


def default_snapshot(
    starting_cash: Decimal,
    *,
    version: int = 0,
    tiers: Sequence[WealthTier] = WEALTH_TIERS,
) -> AggregateSnapshot:
    """Return the cash-only snapshot of a fresh game."""
    return AggregateSnapshot(
        total_cash=starting_cash,
        total_net_worth=starting_cash,
        wealth_tier=classify_wealth_tier(starting_cash, tiers).id,
        version=version,
    )


__all__ = ["compute_aggregate_snapshot", "default_snapshot"]
