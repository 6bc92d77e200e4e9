"""CLI adapter printing the current net worth breakdown."""

from decimal import Decimal

from empire_ledger.domain.services.wealth_tiers import get_next_tier_progress
from empire_ledger.infrastructure.container import build_engine


BREAKDOWN_LINES = (
    ("Cash", "total_cash"),
    ("Stocks", "total_stocks"),
    ("Crypto", "total_crypto"),
    ("Bonds", "total_bonds"),
    ("Other investments", "total_other_investments"),
    ("Property equity", "total_property_equity"),
    ("Lifestyle items", "total_lifestyle_value"),
    ("Ownership", "total_ownership_value"),
)


def _format_amount(value: Decimal) -> str:
    return f"${value:,.2f}"


def main() -> None:
    """Print every net worth component, the total, and the tier."""
    engine = build_engine()
    snapshot = engine.breakdown.execute()

    for label, attribute in BREAKDOWN_LINES:
        print(f"{label:<20}{_format_amount(getattr(snapshot, attribute)):>20}")
    print(f"{'Net worth':<20}{_format_amount(snapshot.total_net_worth):>20}")

    progress = get_next_tier_progress(snapshot.total_net_worth)
    if progress.next_tier is None:
        print(f"Wealth tier: {progress.current_tier.name} (top tier)")
    else:
        print(
            f"Wealth tier: {progress.current_tier.name}, "
            f"{progress.progress:.0f}% towards {progress.next_tier.name}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
